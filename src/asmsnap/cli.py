"""asmsnap CLI: dump snapshots and compare dumps."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


def _build_options(args):
    """DumpOptions from --config, with command-line flags applied on top."""
    from .kernel.options import DumpOptions
    from .api import load_options

    options = load_options(args.config.resolve()) if args.config else DumpOptions()
    if args.include_fields:
        options = options.model_copy(update={"include_fields": True})
    return options


def main():
    """Main CLI entry point for asmsnap commands."""
    try:
        asmsnap_version = get_version("asmsnap")
    except PackageNotFoundError:
        asmsnap_version = "dev"

    parser = argparse.ArgumentParser(
        prog="asmsnap",
        description="asmsnap: Canonical text dumps of assembly metadata for differential testing"
    )
    parser.add_argument("--version", action="version", version=f"asmsnap {asmsnap_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine diagnostics to stderr."
    )
    parent_parser.add_argument(
        "--include-fields",
        action="store_true",
        help="Emit the Fields block for every type"
    )
    parent_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to dump options JSON"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # dump command
    dump_parser = subparsers.add_parser(
        "dump",
        help="Write the canonical dump of a metadata snapshot",
        parents=[parent_parser]
    )
    dump_parser.add_argument(
        "snapshot",
        type=Path,
        help="Path to snapshot JSON"
    )
    dump_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output file for the dump (defaults to stdout)"
    )

    # compare command
    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare a reference dump against a candidate dump",
        parents=[parent_parser]
    )
    compare_parser.add_argument(
        "reference",
        type=Path,
        help="Reference dump (.txt) or snapshot (.json)"
    )
    compare_parser.add_argument(
        "candidate",
        type=Path,
        help="Candidate dump (.txt) or snapshot (.json)"
    )
    compare_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory for comparison.json"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "dump":
        from .api import dump_snapshot, dump_to_file
        from .kernel.errors import DumpError

        try:
            options = _build_options(args)
            snapshot_path = Path(args.snapshot).resolve()
            if args.out is None:
                sys.stdout.write(dump_snapshot(snapshot_path, options))
            else:
                report = dump_to_file(snapshot_path, Path(args.out).resolve(), options)
                if not args.quiet:
                    print("[OK] Dump complete")
                    print(f"  Output: {report.output_path}")
                    print(f"  Types: {report.type_count}")
                    print(f"  SHA256: {report.sha256}")
            sys.exit(0)
        except DumpError as e:
            print(f"Error: [{e.code.value}] {e}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    elif args.command == "compare":
        from .api import compare
        from .kernel.errors import DumpError
        from ._internal.canonical_json import canonical_dumps

        try:
            options = _build_options(args)
            result = compare(Path(args.reference).resolve(), Path(args.candidate).resolve(), options)

            if args.out is not None:
                output_dir = Path(args.out).resolve()
                output_dir.mkdir(parents=True, exist_ok=True)
                report_out = output_dir / "comparison.json"
                report_out.write_text(canonical_dumps(result.model_dump()) + "\n", encoding="utf-8")
            else:
                report_out = None

            if not args.quiet:
                if result.identical:
                    print("[OK] Dumps identical")
                    print(f"  SHA256: {result.reference_sha256}")
                else:
                    print("[DIFF] Dumps differ")
                    print(f"  First difference: line {result.first_difference_line}")
                    print(f"  Added: {result.added_lines}  Removed: {result.removed_lines}")
                    if report_out is None:
                        for line in result.diff:
                            print(line)
                if report_out is not None:
                    print(f"  Report: {report_out}")

            sys.exit(0 if result.identical else 1)
        except DumpError as e:
            print(f"Error: [{e.code.value}] {e}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
