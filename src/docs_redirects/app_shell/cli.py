import argparse
import logging
import sys
from pathlib import Path

from docs_redirects.adapters.artifacts import ArtifactWriter
from docs_redirects.adapters.routes import BuildDirRouteSource, RoutesFileSource
from docs_redirects.components.build import (
    ResolvePathInput,
    RouteSourcePort,
    run_build,
    run_check,
    run_resolve,
)
from docs_redirects.rules.loader import RulesLoadError, default_rules_path, load_rules
from docs_redirects.rules.models import RedirectRules

logger = logging.getLogger("cli")


def get_rules(args: argparse.Namespace) -> RedirectRules:
    rules_path = Path(args.rules) if args.rules else default_rules_path()
    try:
        return load_rules(rules_path)
    except (FileNotFoundError, RulesLoadError) as e:
        logger.error(str(e))
        sys.exit(1)


def get_routes(args: argparse.Namespace) -> RouteSourcePort | None:
    if getattr(args, "build_dir", None):
        return BuildDirRouteSource(args.build_dir)
    if getattr(args, "routes_file", None):
        return RoutesFileSource(args.routes_file)
    return None


def handle_check(args: argparse.Namespace) -> int:
    rules = get_rules(args)
    result = run_check(rules.to_build_input(), routes=get_routes(args))

    for problem in result.problems:
        logger.error("[%s] %s", problem.code, problem.message)

    if not result.success:
        print(f"{len(result.problems)} problem(s) found.")
        return 1

    print(f"OK: {len(rules.redirects)} rules, {result.entry_count} table entries.")
    return 0


def handle_build(args: argparse.Namespace) -> int:
    rules = get_rules(args)
    build_dir = Path(args.build_dir) if args.build_dir else None

    result = run_build(
        rules.to_build_input(write_stubs=not args.no_stubs),
        routes=get_routes(args),
        host_writer=ArtifactWriter(args.out_dir),
        stub_writer=ArtifactWriter(build_dir) if build_dir else None,
    )

    if not result.success:
        for problem in result.errors:
            logger.error("[%s] %s", problem.code, problem.message)
        return 1

    print(f"Wrote {len(result.written)} file(s).")
    return 0


def handle_resolve(args: argparse.Namespace) -> int:
    rules = get_rules(args)
    build = run_build(rules.to_build_input(write_stubs=False))
    if build.table is None:
        for problem in build.errors:
            logger.error("[%s] %s", problem.code, problem.message)
        return 1

    result = run_resolve(ResolvePathInput(path=args.path), table=build.table)
    if result.redirect is None:
        print(f"{args.path}: no redirect")
    else:
        print(f"{args.path} -> {result.redirect.destination} ({result.redirect.status_code})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-redirects", description="Documentation redirect table tools"
    )
    parser.add_argument("--rules", help="Path to the redirect rules file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check
    check_parser = subparsers.add_parser("check", help="Validate the redirect rules")
    routes_group = check_parser.add_mutually_exclusive_group()
    routes_group.add_argument("--build-dir", help="Built site directory")
    routes_group.add_argument("--routes-file", help="Text file with one page route per line")

    # build
    build_parser_ = subparsers.add_parser("build", help="Write host rules and redirect stubs")
    build_routes = build_parser_.add_mutually_exclusive_group()
    build_routes.add_argument("--build-dir", help="Built site directory (stubs are written here)")
    build_routes.add_argument("--routes-file", help="Text file with one page route per line")
    build_parser_.add_argument(
        "--out-dir", default=".", help="Directory host rule target paths are relative to"
    )
    build_parser_.add_argument(
        "--no-stubs", action="store_true", help="Do not write client-side redirect stubs"
    )

    # resolve
    resolve_parser = subparsers.add_parser("resolve", help="Show how one path resolves")
    resolve_parser.add_argument("path", help="Inbound path, e.g. /docs/overview/quickstart")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.command == "check":
            return handle_check(args)
        elif args.command == "build":
            return handle_build(args)
        elif args.command == "resolve":
            return handle_resolve(args)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())
