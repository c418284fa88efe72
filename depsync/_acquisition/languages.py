"""Language plugins for the import-scan acquisition tier.

Each plugin detects its language from a file's extension and content,
extracts import statements, filters the standard library and maps the
remaining imports to package references. Detection and extraction are
regex based; nothing is executed or compiled.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .._lockfiles.models import Ecosystem

DETECTION_THRESHOLD = 40
EXTENSION_SCORE = 40
PATTERN_SCORE = 15


@dataclass(frozen=True)
class ImportEntry:
    module: str
    is_stdlib: bool


@dataclass(frozen=True)
class DetectedPackage:
    """A package reference inferred from an import."""

    name: str
    ecosystem: Ecosystem


def _dedup(entries: list[ImportEntry]) -> list[ImportEntry]:
    seen: set[str] = set()
    result = []
    for entry in entries:
        if entry.module not in seen:
            seen.add(entry.module)
            result.append(entry)
    return result


class LanguagePlugin(ABC):
    """Base class for language plugins.

    Subclasses set id, label, extensions, ecosystem and patterns, and
    implement extract_imports. The default is_stdlib checks a module set;
    the default map_to_package uses the module name verbatim.
    """

    id: str = ""
    label: str = ""
    extensions: tuple[str, ...] = ()
    ecosystem: Ecosystem = Ecosystem.SYSTEM
    patterns: tuple[re.Pattern, ...] = ()
    negative_patterns: tuple[re.Pattern, ...] = ()
    stdlib: frozenset[str] = frozenset()

    def matches_extension(self, filename: str) -> bool:
        return filename.lower().endswith(self.extensions)

    def detect(self, content: str, filename: str) -> int:
        """Score 0-100 for how likely content is written in this language.

        40 for a matching extension plus 15 per matching content pattern;
        any negative pattern zeroes the score.
        """
        score = EXTENSION_SCORE if self.matches_extension(filename) else 0
        for pattern in self.patterns:
            if pattern.search(content):
                score += PATTERN_SCORE
                if score >= 100:
                    break
        for pattern in self.negative_patterns:
            if pattern.search(content):
                return 0
        return min(score, 100)

    @abstractmethod
    def extract_imports(self, content: str) -> list[ImportEntry]:
        """Return the deduplicated imports found in content."""

    def is_stdlib(self, module: str) -> bool:
        return module in self.stdlib

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        if self.is_stdlib(module):
            return None
        return DetectedPackage(name=module, ecosystem=self.ecosystem)

    def _entries(self, modules: list[str]) -> list[ImportEntry]:
        return _dedup([ImportEntry(module=m, is_stdlib=self.is_stdlib(m)) for m in modules if m])


def _compile(*patterns: str, flags: int = 0) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, flags) for p in patterns)


class PythonPlugin(LanguagePlugin):
    id = "python"
    label = "Python"
    extensions = (".py",)
    ecosystem = Ecosystem.PIP
    patterns = _compile(r"\bdef ", r"\bimport ", r"\bfrom \S+ import", r"\bclass \w+.*:", r"if __name__")
    stdlib = frozenset(
        {
            "os", "sys", "json", "re", "math", "datetime", "collections", "typing",
            "pathlib", "unittest", "http", "urllib", "hashlib", "logging", "io", "abc",
            "asyncio", "functools", "itertools", "string", "textwrap", "struct",
            "codecs", "time", "calendar", "argparse", "getpass", "platform", "socket",
            "email", "html", "xml", "sqlite3", "csv", "configparser", "copy", "pprint",
            "enum", "dataclasses", "contextlib", "decimal", "fractions", "random",
            "statistics", "array", "queue", "heapq", "bisect", "weakref", "types",
            "traceback", "warnings", "subprocess", "multiprocessing", "threading",
            "signal", "mmap", "select", "selectors", "syslog", "shutil", "tempfile",
            "glob", "fnmatch", "zipfile", "tarfile", "gzip", "bz2", "lzma", "zlib",
            "pdb", "cProfile", "timeit", "doctest", "venv", "ensurepip", "distutils",
            "importlib", "pkgutil", "inspect", "base64", "binascii", "uuid", "secrets",
            "operator", "tomllib", "concurrent", "__future__",
        }
    )
    _import_re = re.compile(r"^import\s+([\w.]+)", re.MULTILINE)
    _from_re = re.compile(r"^from\s+([\w.]+)\s+import", re.MULTILINE)

    def extract_imports(self, content: str) -> list[ImportEntry]:
        modules = [m.split(".")[0] for m in self._import_re.findall(content)]
        modules += [m.split(".")[0] for m in self._from_re.findall(content)]
        return self._entries(modules)

    def is_stdlib(self, module: str) -> bool:
        return module.split(".")[0] in self.stdlib


class JavaScriptPlugin(LanguagePlugin):
    id = "jsts"
    label = "JavaScript/TypeScript"
    extensions = (".js", ".ts", ".jsx", ".tsx", ".mjs", ".cjs")
    ecosystem = Ecosystem.NPM
    patterns = _compile(r"\bconst ", r"require\(", r"\bimport ", r"\bexport ", r"\bfunction ", r"=>", r"\basync ")
    stdlib = frozenset(
        {
            "fs", "path", "http", "https", "os", "crypto", "stream", "events", "util",
            "url", "buffer", "querystring", "child_process", "cluster", "dgram", "dns",
            "net", "readline", "repl", "tls", "tty", "vm", "zlib", "assert",
            "perf_hooks", "worker_threads", "v8", "process", "console", "module",
            "timers",
        }
    )
    _import_res = _compile(
        r"""require\(\s*['"]([^'"]+)['"]\s*\)""",
        r"""from\s+['"]([^'"]+)['"]""",
        r"""import\s+['"]([^'"]+)['"]""",
    )

    def extract_imports(self, content: str) -> list[ImportEntry]:
        modules = []
        for pattern in self._import_res:
            for specifier in pattern.findall(content):
                if specifier.startswith((".", "/")):
                    continue
                parts = specifier.split("/")
                # @scope/name/sub -> @scope/name, lodash/fp -> lodash
                modules.append("/".join(parts[:2]) if specifier.startswith("@") else parts[0])
        return self._entries(modules)

    def is_stdlib(self, module: str) -> bool:
        return module.removeprefix("node:") in self.stdlib or module.startswith("node:")


class JavaPlugin(LanguagePlugin):
    id = "java"
    label = "Java"
    extensions = (".java",)
    ecosystem = Ecosystem.MAVEN
    patterns = _compile(
        r"\bpublic class\b", r"\bimport java\.", r"\bpackage com\.", r"System\.out", r"\bprivate ", r"\bprotected "
    )
    _import_re = re.compile(r"^import\s+(?:static\s+)?([\w.]+)", re.MULTILINE)
    _stdlib_re = re.compile(r"^(java|javax|sun|jdk)\.")

    def extract_imports(self, content: str) -> list[ImportEntry]:
        entries = []
        for full in self._import_re.findall(content):
            segments = full.split(".")
            module = ".".join(segments[:3]) if len(segments) >= 3 else full
            entries.append(ImportEntry(module=module, is_stdlib=self.is_stdlib(full)))
        return _dedup(entries)

    def is_stdlib(self, module: str) -> bool:
        return bool(self._stdlib_re.match(module))

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        if self.is_stdlib(module):
            return None
        segments = module.split(".")
        if len(segments) >= 3:
            # com.google.gson -> com.google:gson
            return DetectedPackage(name=f"{'.'.join(segments[:2])}:{segments[2]}", ecosystem=self.ecosystem)
        return DetectedPackage(name=module, ecosystem=self.ecosystem)


class CSharpPlugin(LanguagePlugin):
    id = "csharp"
    label = "C#"
    extensions = (".cs",)
    ecosystem = Ecosystem.NUGET
    patterns = _compile(
        r"\busing System", r"\bnamespace ", r"\bpublic class\b", r"Console\.Write", r"\bvar ", r"\basync Task"
    )
    _using_re = re.compile(r"^using\s+([\w.]+)\s*;", re.MULTILINE)
    _stdlib_re = re.compile(r"^(System|Microsoft|Windows)(\.|$)")

    def extract_imports(self, content: str) -> list[ImportEntry]:
        return self._entries(self._using_re.findall(content))

    def is_stdlib(self, module: str) -> bool:
        return bool(self._stdlib_re.match(module))

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        if self.is_stdlib(module):
            return None
        return DetectedPackage(name=".".join(module.split(".")[:2]), ecosystem=self.ecosystem)


class RubyPlugin(LanguagePlugin):
    id = "ruby"
    label = "Ruby"
    extensions = (".rb",)
    ecosystem = Ecosystem.GEM
    patterns = _compile(
        r"""require ['"]""", r"class \w+ < ", r"\bdef ", r"\bend\b", r"attr_accessor", r"\bputs ", r"\bmodule "
    )
    stdlib = frozenset(
        {
            "json", "csv", "net/http", "fileutils", "optparse", "set", "yaml", "erb",
            "logger", "open-uri", "uri", "ostruct", "benchmark", "bigdecimal", "date",
            "digest", "drb", "English", "fiddle", "forwardable", "io/console", "io/wait",
            "ipaddr", "irb", "matrix", "minitest", "monitor", "mutex_m", "net/ftp",
            "net/imap", "net/pop", "net/smtp", "observer", "open3", "openssl", "pathname",
            "pp", "prettyprint", "prime", "pstore", "racc", "readline", "reline",
            "resolv", "ripper", "securerandom", "shellwords", "singleton", "stringio",
            "strscan", "syslog", "tempfile", "timeout", "tmpdir", "tsort", "un",
            "weakref", "webrick", "zlib",
        }
    )
    _require_re = re.compile(r"""^require\s+['"]([^'"]+)['"]""", re.MULTILINE)
    _gem_re = re.compile(r"""^gem\s+['"]([^'"]+)['"]""", re.MULTILINE)

    def extract_imports(self, content: str) -> list[ImportEntry]:
        entries = [ImportEntry(module=m, is_stdlib=self.is_stdlib(m)) for m in self._require_re.findall(content)]
        entries += [ImportEntry(module=m, is_stdlib=False) for m in self._gem_re.findall(content)]
        return _dedup(entries)


class PhpPlugin(LanguagePlugin):
    id = "php"
    label = "PHP"
    extensions = (".php",)
    ecosystem = Ecosystem.COMPOSER
    patterns = _compile(r"<\?php", r"\bnamespace ", r"\buse ", r"\bfunction ", r"\bclass ", r"\becho ", r"\$")
    _use_re = re.compile(r"^use\s+([\w\\]+)", re.MULTILINE)

    def extract_imports(self, content: str) -> list[ImportEntry]:
        modules = []
        for full in self._use_re.findall(content):
            segments = [s.lower() for s in full.split("\\") if s]
            if segments:
                # Vendor\Package\Class -> vendor/package
                modules.append("/".join(segments[:2]))
        return self._entries(modules)

    def is_stdlib(self, module: str) -> bool:
        # every `use` refers to a userland namespace
        return False


class GoPlugin(LanguagePlugin):
    id = "go"
    label = "Go"
    extensions = (".go",)
    ecosystem = Ecosystem.GO
    patterns = _compile(
        r"\bpackage ", r"\bfunc ", r'import "', r"\bgo func", r"\bvar ", r"\btype ", r"interface\s*\{"
    )
    _block_re = re.compile(r"import\s*\(([\s\S]*?)\)")
    _single_re = re.compile(r'import\s+(?:\w+\s+)?"([^"]+)"')
    _quoted_re = re.compile(r'"([^"]+)"')

    def extract_imports(self, content: str) -> list[ImportEntry]:
        modules = []
        for block in self._block_re.findall(content):
            modules.extend(self._quoted_re.findall(block))
        modules.extend(self._single_re.findall(content))
        return self._entries(modules)

    def is_stdlib(self, module: str) -> bool:
        # standard library import paths have no dot in the first element
        return "." not in module.split("/")[0]

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        if self.is_stdlib(module):
            return None
        # github.com/owner/repo/subpkg -> github.com/owner/repo
        return DetectedPackage(name="/".join(module.split("/")[:3]), ecosystem=self.ecosystem)


class RustPlugin(LanguagePlugin):
    id = "rust"
    label = "Rust"
    extensions = (".rs",)
    ecosystem = Ecosystem.CARGO
    patterns = _compile(
        r"fn main\(\)", r"\buse std::", r"\blet mut ", r"\bimpl ", r"\bpub fn", r"\bmatch ", r"#\[derive"
    )
    stdlib = frozenset({"std", "core", "alloc", "proc_macro", "crate", "self", "super"})
    _use_re = re.compile(r"^\s*(?:pub\s+)?use\s+([a-z_][a-z0-9_]*)", re.MULTILINE)
    _extern_re = re.compile(r"^\s*extern\s+crate\s+([a-z_][a-z0-9_]*)", re.MULTILINE)

    def extract_imports(self, content: str) -> list[ImportEntry]:
        return self._entries(self._use_re.findall(content) + self._extern_re.findall(content))

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        if self.is_stdlib(module):
            return None
        # crate names use '-' where the import path uses '_'
        return DetectedPackage(name=module.replace("_", "-"), ecosystem=self.ecosystem)


class DartPlugin(LanguagePlugin):
    id = "dart"
    label = "Dart"
    extensions = (".dart",)
    ecosystem = Ecosystem.PUB
    patterns = _compile(r"""import ['"]package:""", r"void main\(\)", r"class \w+ extends", r"\bWidget ", r"@override")
    _package_re = re.compile(r"""^import\s+['"]package:([^/'"]+)""", re.MULTILINE)
    _dart_re = re.compile(r"""^import\s+['"]dart:([^'"]+)['"]""", re.MULTILINE)

    def extract_imports(self, content: str) -> list[ImportEntry]:
        modules = self._package_re.findall(content)
        modules += [f"dart:{m}" for m in self._dart_re.findall(content)]
        return self._entries(modules)

    def is_stdlib(self, module: str) -> bool:
        return module.startswith("dart:")


class SwiftPlugin(LanguagePlugin):
    id = "swift"
    label = "Swift"
    extensions = (".swift",)
    ecosystem = Ecosystem.SWIFT
    patterns = _compile(
        r"\bimport Foundation", r"\bfunc ", r"\blet ", r"\bvar ", r"\bstruct ", r"\bclass ", r"\bprotocol ",
        r"\bguard let",
    )
    stdlib = frozenset(
        {
            "Foundation", "UIKit", "SwiftUI", "Combine", "CoreData", "CoreGraphics",
            "CoreLocation", "MapKit", "AVFoundation", "CloudKit", "GameKit", "HealthKit",
            "HomeKit", "Metal", "MetalKit", "SceneKit", "SpriteKit", "StoreKit",
            "WatchKit", "AppKit", "Cocoa", "Darwin", "Dispatch", "ObjectiveC", "os",
            "Swift", "XCTest", "Accelerate", "CoreFoundation", "CoreImage", "CoreML",
            "CoreMotion", "CoreText", "CryptoKit", "NaturalLanguage", "Network",
            "PDFKit", "QuartzCore", "RealityKit", "Security", "Vision", "WebKit",
        }
    )
    _import_re = re.compile(r"^import\s+(\w+)", re.MULTILINE)

    def extract_imports(self, content: str) -> list[ImportEntry]:
        return self._entries(self._import_re.findall(content))


class ElixirPlugin(LanguagePlugin):
    """Elixir sources and mix.exs; only mix dependency tuples are extracted."""

    id = "elixir"
    label = "Elixir"
    extensions = (".ex", ".exs")
    ecosystem = Ecosystem.HEX
    patterns = _compile(
        r"\bdefmodule ", r"\bdef ", r"\buse ", r"\bimport ", r"\balias ", r"\|>", r"\bdo\b", r"\bend\b"
    )
    stdlib = frozenset(
        {
            "Kernel", "Enum", "Map", "String", "IO", "File", "Path", "List", "Tuple",
            "Agent", "Task", "GenServer", "Supervisor", "Application", "Logger", "Access",
            "Base", "Code", "Date", "DateTime", "Exception", "Float", "Function",
            "Integer", "Macro", "MapSet", "Module", "NaiveDateTime", "Process",
            "Protocol", "Range", "Regex", "Registry", "Stream", "System", "Time",
            "URI", "Version",
        }
    )
    _dep_re = re.compile(r"""\{:(\w+),\s*["'](?:~>|>=|>)""")

    def extract_imports(self, content: str) -> list[ImportEntry]:
        return self._entries(self._dep_re.findall(content))


class ErlangPlugin(LanguagePlugin):
    id = "erlang"
    label = "Erlang"
    extensions = (".erl", ".hrl")
    ecosystem = Ecosystem.HEX
    patterns = _compile(
        r"-module\(", r"-export\(", r"\bspawn\(", r"\breceive\b", r"-spec", r"-behaviour", r"-record"
    )
    stdlib = frozenset(
        {
            "kernel", "stdlib", "sasl", "mnesia", "inets", "crypto", "ssl",
            "public_key", "ssh", "snmp", "os_mon", "runtime_tools", "tools",
            "compiler", "syntax_tools", "parsetools", "et", "observer", "debugger",
            "wx", "xmerl", "edoc", "erl_interface", "jinterface", "megaco",
            "diameter", "eldap", "ftp", "tftp",
            # OTP behaviours
            "gen_server", "gen_statem", "gen_event", "supervisor", "application",
        }
    )
    _include_lib_re = re.compile(r"""-include_lib\("([^/"]+)/""")
    _behaviour_re = re.compile(r"-behaviou?r\((\w+)\)")

    def extract_imports(self, content: str) -> list[ImportEntry]:
        modules = self._include_lib_re.findall(content)
        modules += [m.lower() for m in self._behaviour_re.findall(content)]
        return self._entries(modules)

    def is_stdlib(self, module: str) -> bool:
        return module.lower() in self.stdlib


class TerraformPlugin(LanguagePlugin):
    id = "terraform"
    label = "Terraform"
    extensions = (".tf",)
    ecosystem = Ecosystem.TERRAFORM
    patterns = _compile(r'resource "', r'provider "', r'variable "', r'module "', r'data "', r'output "')
    _source_re = re.compile(r'source\s*=\s*"([^"]+)"')

    def extract_imports(self, content: str) -> list[ImportEntry]:
        # local paths and git/http sources are not registry modules
        sources = [s for s in self._source_re.findall(content) if not s.startswith(".") and "://" not in s]
        return self._entries([s for s in sources if "::" not in s])

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        # hashicorp/consul/aws -> hashicorp/consul
        return DetectedPackage(name="/".join(module.split("/")[:2]), ecosystem=self.ecosystem)


C_STDLIB = frozenset(
    {
        "stdio.h", "stdlib.h", "string.h", "math.h", "ctype.h", "errno.h",
        "float.h", "limits.h", "locale.h", "setjmp.h", "signal.h", "stdarg.h",
        "stddef.h", "time.h", "assert.h", "complex.h", "fenv.h", "inttypes.h",
        "iso646.h", "stdbool.h", "stdint.h", "tgmath.h", "wchar.h", "wctype.h",
        "stdalign.h", "stdatomic.h", "stdnoreturn.h", "threads.h", "uchar.h",
        "unistd.h", "fcntl.h", "sys/types.h", "sys/stat.h", "sys/socket.h",
        "sys/wait.h", "sys/mman.h", "netinet/in.h", "arpa/inet.h", "pthread.h",
        "dirent.h", "termios.h", "poll.h", "dlfcn.h", "semaphore.h",
    }
)

_INCLUDE_RE = re.compile(r"""^#include\s*[<"]([^>"]+)""", re.MULTILINE)


class CPlugin(LanguagePlugin):
    """C headers map to Conan package guesses (openssl/ssl.h -> openssl)."""

    id = "c"
    label = "C"
    extensions = (".c", ".h")
    ecosystem = Ecosystem.CONAN
    patterns = _compile(
        r"#include\s*<", r"int main\(", r"\bvoid ", r"printf\(", r"malloc\(", r"sizeof\(", r"\btypedef "
    )
    # C++ signals rule C out
    negative_patterns = _compile(
        r"\bstd::", r"\bnamespace ", r"template\s*<", r"\biostream\b", r"\bvector<", r"\bcout\b"
    )
    stdlib = C_STDLIB

    def extract_imports(self, content: str) -> list[ImportEntry]:
        return self._entries(_INCLUDE_RE.findall(content))

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        if self.is_stdlib(module):
            return None
        return DetectedPackage(name=re.sub(r"\.h$", "", module.split("/")[0]), ecosystem=self.ecosystem)


class CppPlugin(LanguagePlugin):
    id = "cpp"
    label = "C++"
    extensions = (".cpp", ".hpp", ".cc", ".cxx", ".hxx", ".hh")
    ecosystem = Ecosystem.CONAN
    patterns = _compile(
        r"#include\s*<iostream>", r"\bstd::", r"\bnamespace ", r"template\s*<", r"\bclass ", r"\bcout\b",
        r"vector<", r"map<", r"unique_ptr", r"shared_ptr",
    )
    stdlib = C_STDLIB | frozenset(
        {
            "iostream", "fstream", "sstream", "string", "vector", "map", "set",
            "unordered_map", "unordered_set", "list", "deque", "queue", "stack",
            "array", "algorithm", "functional", "numeric", "memory", "utility",
            "tuple", "optional", "variant", "any", "type_traits", "chrono", "thread",
            "mutex", "condition_variable", "future", "atomic", "bitset", "complex",
            "random", "regex", "filesystem", "format", "ranges", "span", "concepts",
            "coroutine", "source_location", "expected", "print",
        }
    )

    def extract_imports(self, content: str) -> list[ImportEntry]:
        return self._entries(_INCLUDE_RE.findall(content))

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        if self.is_stdlib(module):
            return None
        return DetectedPackage(name=re.sub(r"\.h(pp)?$", "", module.split("/")[0]), ecosystem=self.ecosystem)


class HaskellPlugin(LanguagePlugin):
    id = "haskell"
    label = "Haskell"
    extensions = (".hs", ".lhs")
    ecosystem = Ecosystem.HACKAGE
    patterns = _compile(
        r"\bmodule ", r"import qualified", r"\bdata ", r"\bwhere\b", r"::", r"->", r"\bderiving\b",
        r"\binstance ", r"\bnewtype ",
    )
    stdlib_prefixes = (
        "Prelude", "Data.", "Control.", "System.", "GHC.", "Foreign.", "Numeric", "Text.Show", "Text.Read", "Type.",
    )
    # module prefix -> hackage package, for modules outside base
    known_packages = {
        "Data.Aeson": "aeson",
        "Data.ByteString": "bytestring",
        "Data.Text": "text",
        "Data.Map": "containers",
        "Data.Set": "containers",
        "Data.HashMap": "unordered-containers",
        "Data.HashSet": "unordered-containers",
        "Data.Vector": "vector",
        "Data.Conduit": "conduit",
        "Network.HTTP": "http-client",
        "Network.Wai": "wai",
        "Database.Persist": "persistent",
        "Data.Yaml": "yaml",
        "Data.Csv": "cassava",
        "Text.Megaparsec": "megaparsec",
        "Text.Parsec": "parsec",
        "Options.Applicative": "optparse-applicative",
        "Lens": "lens",
    }
    _import_re = re.compile(r"^import\s+(?:qualified\s+)?([\w.]+)", re.MULTILINE)

    def extract_imports(self, content: str) -> list[ImportEntry]:
        return self._entries(self._import_re.findall(content))

    def _known_package(self, module: str) -> Optional[str]:
        matches = [prefix for prefix in self.known_packages if module.startswith(prefix)]
        return self.known_packages[max(matches, key=len)] if matches else None

    def is_stdlib(self, module: str) -> bool:
        if not module.startswith(self.stdlib_prefixes):
            return False
        return self._known_package(module) is None

    def map_to_package(self, module: str) -> Optional[DetectedPackage]:
        if self.is_stdlib(module):
            return None
        name = self._known_package(module) or module.split(".")[0].lower()
        return DetectedPackage(name=name, ecosystem=self.ecosystem)


class RPlugin(LanguagePlugin):
    id = "r"
    label = "R"
    extensions = (".r", ".rmd")
    ecosystem = Ecosystem.CRAN
    patterns = _compile(
        r"\blibrary\(", r"\brequire\(", r"<-", r"\bfunction\(", r"data\.frame", r"%>%", r"\bggplot\b", r"\btibble\b"
    )
    stdlib = frozenset(
        {
            "base", "utils", "stats", "graphics", "grDevices", "datasets", "methods",
            "grid", "parallel", "splines", "stats4", "tcltk", "tools", "compiler",
        }
    )
    _import_res = _compile(r"""library\(["']?(\w+)["']?\)""", r"""require\(["']?(\w+)["']?\)""", r"(\w+)::")

    def extract_imports(self, content: str) -> list[ImportEntry]:
        modules = []
        for pattern in self._import_res:
            modules.extend(pattern.findall(content))
        return self._entries(modules)


class JuliaPlugin(LanguagePlugin):
    id = "julia"
    label = "Julia"
    extensions = (".jl",)
    ecosystem = Ecosystem.JULIA
    patterns = _compile(
        r"\busing ", r"\bimport ", r"\bmodule ", r"\bfunction ", r"\bend\b", r"\bmutable struct\b",
        r"\babstract type\b", r"\bbegin\b", r"\bmacro ",
    )
    stdlib = frozenset(
        {
            "Base", "Core", "LinearAlgebra", "Statistics", "Distributed", "Dates",
            "Printf", "Random", "SparseArrays", "Test", "UUIDs", "Unicode",
            "Markdown", "REPL", "Pkg", "InteractiveUtils", "Sockets", "SHA",
            "Serialization", "SharedArrays", "FileWatching", "LibGit2", "Logging",
            "Mmap", "Profile", "TOML", "DelimitedFiles",
        }
    )
    _import_re = re.compile(r"^(?:using|import)\s+([\w.]+)", re.MULTILINE)

    def extract_imports(self, content: str) -> list[ImportEntry]:
        return self._entries([re.split(r"[.:]", m)[0] for m in self._import_re.findall(content)])


class NixPlugin(LanguagePlugin):
    id = "nix"
    label = "Nix"
    extensions = (".nix",)
    ecosystem = Ecosystem.NIX
    patterns = _compile(
        r"\{ pkgs \? import", r"mkDerivation", r"buildInputs", r"fetchurl", r"fetchFromGitHub", r"\bstdenv\b",
        r"\blib\.", r"with pkgs;",
    )
    stdlib = frozenset(
        {"stdenv", "fetchurl", "fetchFromGitHub", "lib", "callPackage", "writeShellScriptBin", "runCommand",
         "writeText", "pkgs"}
    )
    _inputs_re = re.compile(
        r"(?:buildInputs|nativeBuildInputs|propagatedBuildInputs)\s*=\s*(?:with\s+\w+;\s*)?\[([^\]]+)\]"
    )
    _item_re = re.compile(r"(?:pkgs\.)?([a-zA-Z0-9_-]+)")

    def extract_imports(self, content: str) -> list[ImportEntry]:
        modules = []
        for block in self._inputs_re.findall(content):
            modules.extend(self._item_re.findall(block))
        return self._entries(modules)


DEFAULT_PLUGINS: tuple[LanguagePlugin, ...] = (
    PythonPlugin(),
    JavaScriptPlugin(),
    JavaPlugin(),
    CSharpPlugin(),
    RubyPlugin(),
    PhpPlugin(),
    GoPlugin(),
    RustPlugin(),
    DartPlugin(),
    ElixirPlugin(),
    SwiftPlugin(),
    TerraformPlugin(),
    CPlugin(),
    CppPlugin(),
    ErlangPlugin(),
    HaskellPlugin(),
    RPlugin(),
    JuliaPlugin(),
    NixPlugin(),
)
