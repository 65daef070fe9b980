import sys
import json
import logging
from pathlib import Path

from . import __version__

def _setup_basic_logging(verbose=False):
    # log to stderr only so stdout carries just the JSON summary
    # in non-verbose mode, only show WARNING and above to reduce noise
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

def _default_config_path():
    # packaged next to this file as package data
    return Path(__file__).parent / "config.yaml"

def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)

    # Fast path for version
    if "--version" in argv:
        print(__version__)
        return 0

    verbose = "--verbose" in argv or "-v" in argv
    if "--verbose" in argv:
        argv.remove("--verbose")
    if "-v" in argv:
        argv.remove("-v")

    _setup_basic_logging(verbose)

    config_path = None
    if "--config" in argv:
        i = argv.index("--config")
        if i + 1 < len(argv):
            config_path = argv[i + 1]
            del argv[i:i+2]

    if not config_path:
        default_config = _default_config_path()
        if default_config.exists():
            config_path = str(default_config)

    # Lazy import to avoid pulling the whole pipeline on --version
    from .application.scan_packages import ScanPackagesUseCase

    use_case = ScanPackagesUseCase(config_path, verbose=verbose)
    result = use_case.execute_from_command_line(argv)

    result.setdefault("metadata", {})
    result["metadata"]["engineVersion"] = __version__
    result["metadata"]["schemaVersion"] = 1

    print(json.dumps(result, indent=2))
    return 1 if "error" in result else 0


if __name__ == "__main__":
    sys.exit(main())
