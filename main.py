# main.py
"""
Packages an unpacked Windows Store app directory into a signed .appx.

Runs MakeAppx, MakeCert, Pvk2Pfx and SignTool from the newest installed
Windows SDK and re-prompts for paths whenever an attempt fails.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from appx_signer.Application import PackagerApp
from appx_signer.Config import PackagerConfig
from appx_signer.Console import Console
from appx_signer.errors import ConfigError
from appx_signer.LoggingSetup import setup_logging
from appx_signer.PathResolver import PathResolver


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Package, self-sign and sign a Windows Store app directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py
  python main.py --source "C:\\Apps\\MyApp" --output "D:\\Backup"
  python main.py --kits-root "D:\\Windows Kits\\10\\bin" --arch x86 -v
        """
    )
    parser.add_argument("--source", help="App directory containing AppxManifest.xml")
    parser.add_argument("--output", help="Existing directory for .appx/.pvk/.cer/.pfx")
    parser.add_argument("--kits-root", type=Path, help="Windows Kits 10 bin directory")
    parser.add_argument("--arch", help="Tool architecture subdirectory (default: x64)")
    parser.add_argument("--config", type=Path, help="Path to packager_config.json")
    parser.add_argument("--max-attempts", type=positive_int, default=None,
                        help="Stop after this many failed attempts (default: unlimited)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    is_frozen = getattr(sys, 'frozen', False)
    path_resolver = PathResolver(Path(__file__), is_frozen=is_frozen)
    path_resolver.ensure_local_dir_structure()
    setup_logging(path_resolver.paths.logs_dir, verbose=args.verbose, is_frozen=is_frozen)

    console = Console()
    try:
        config_path = args.config or path_resolver.get_config_path()
        config = PackagerConfig.load(config_path).with_overrides(
            kits_root=args.kits_root,
            architecture=args.arch,
        )
    except ConfigError as e:
        console.error(str(e))
        return 1

    app = PackagerApp(
        config,
        console,
        preset_source=args.source,
        preset_output=args.output,
        max_attempts=args.max_attempts,
    )

    try:
        return app.run()
    except KeyboardInterrupt:
        logging.info("Interrupted by user.")
        return 1
    except Exception as e:
        logging.error(f"ERROR: {type(e).__name__}: {e}")
        import traceback
        logging.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
