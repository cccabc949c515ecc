"""
Header generator: the declarations artifact (``<base>.h``).

The declarations are identical for every registry.  Only the include
guard and the namespace change, so code written against one generated
registry compiles unchanged against any other.
"""

from __future__ import annotations

from bin2cpp.core.models.registry import GenerationContext
from bin2cpp.core.models.template import GeneratedFile
from bin2cpp.core.services.generators.common import (
    BANNER,
    close_namespace,
    include_guard,
    open_namespace,
)

_INCLUDES = """\
#include <cstddef>
#include <map>
#include <stdexcept>
#include <string>
"""

_DECLARATIONS = """\
// one embedded file: its original name and its raw data
struct EmbeddedFile {
    const char * fileName;
    const char * fileData;
    std::size_t fileDataSize;
    const std::string & (*loadContent)();

    // name of the file as it was given to bin2cpp
    std::string name() const {
        return std::string{ fileName };
    }

    // full content of the file: built on first call, then cached
    // for the lifetime of the process
    const std::string & content() const {
        return loadContent();
    }
};

// total number of embedded files
extern const std::size_t embeddedFileCount;

// all the embedded files, in input order
extern const EmbeddedFile embeddedFileList[];

// all the embedded files, as a range
struct EmbeddedFileRange {
    const EmbeddedFile * begin() const {
        return embeddedFileList;
    }
    const EmbeddedFile * end() const {
        return embeddedFileList + embeddedFileCount;
    }
    std::size_t size() const {
        return embeddedFileCount;
    }
};

// for (const auto & file : fileList()) { ... }
inline EmbeddedFileRange fileList() {
    return EmbeddedFileRange{};
}

// the embedded file named fileName, or nullptr if there is none
inline const EmbeddedFile * findFile(const std::string & fileName) {
    for (const auto & file : fileList()) {
        if (fileName == file.fileName) {
            return &file;
        }
    }
    return nullptr;
}

// all the embedded files indexed by their name, built on first call
inline const std::map<std::string, std::string> & allEmbeddedFiles() {
    static const std::map<std::string, std::string> s_files =
        []() -> std::map<std::string, std::string> {
            std::map<std::string, std::string> files;
            for (const auto & file : fileList()) {
                files.emplace(file.name(), file.content());
            }
            return files;
        }();
    return s_files;
}

// content of the embedded file named fileName (throws if there is none)
inline const std::string & mustGetFile(const std::string & fileName) {
    const EmbeddedFile * file = findFile(fileName);
    if (file == nullptr) {
        throw std::runtime_error{ "embedded file not found: " + fileName };
    }
    return file->content();
}"""


def generate_header(context: GenerationContext) -> GeneratedFile:
    """Render the declarations artifact for ``context``."""
    guard = include_guard(context)

    lines = [
        BANNER.rstrip("\n"),
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
        _INCLUDES.rstrip("\n"),
        "",
    ]
    lines.extend(open_namespace(context))
    lines.append(_DECLARATIONS)
    lines.extend(close_namespace(context))
    lines.append("")
    lines.append(f"#endif // {guard}")

    return GeneratedFile(
        path=context.header_name,
        content="\n".join(lines) + "\n",
        kind="header",
        reason=f"Declarations for {len(context.inputs)} embedded file(s)",
    )
