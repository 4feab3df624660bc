"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    ARGUMENT_ERROR = 2


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PACKAGE_JSON_FILE = "package.json"
    NODE_MODULES_DIR = "node_modules"
    CONFIG_FILE = "importgraph.yml"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "IMPORTGRAPH_LOG_LEVEL"
    ENV_ROOT = "IMPORTGRAPH_ROOT"
    DEFAULT_LOG_LEVEL = "INFO"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    DEFAULT_PACKAGE_NAME = "-"
    DEFAULT_PACKAGE_VERSION = "0.0.0"
    DEFAULT_CONDITION = "default"
    VIRTUAL_ROOT_URI = "package:root"
    PRIVATE_QUERY_PARAM = "private"

    # Synthetic module ids (e.g. generated by bundler plugins) start with NUL.
    SYNTHETIC_PREFIX = "\0"
    NODE_SCHEME = "node"
    IMPLIED_FROM_NODE = "node"

    NODE_BUILTINS = frozenset([
        "assert", "assert/strict", "async_hooks", "buffer", "child_process",
        "cluster", "console", "constants", "crypto", "dgram",
        "diagnostics_channel", "dns", "dns/promises", "domain", "events", "fs",
        "fs/promises", "http", "http2", "https", "inspector",
        "inspector/promises", "module", "net", "os", "path", "path/posix",
        "path/win32", "perf_hooks", "process", "punycode", "querystring",
        "readline", "readline/promises", "repl", "stream", "stream/consumers",
        "stream/promises", "stream/web", "string_decoder", "sys", "timers",
        "timers/promises", "tls", "trace_events", "tty", "url", "util",
        "util/types", "v8", "vm", "wasi", "worker_threads", "zlib",
    ])
