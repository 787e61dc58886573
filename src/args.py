"""Argument parsing functionality for typesreg."""

import argparse


def build_parser():
    """Build the argument parser with one subcommand per registry query."""
    parser = argparse.ArgumentParser(
        prog="typesreg",
        description="typesreg - query and resolve a typings package catalog",
        add_help=True,
    )

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or YML)",
                        action="store",
                        type=str)
    parser.add_argument("--data-dir",
                        dest="DATA_DIR",
                        help="Directory or http(s) URL holding definitions.json",
                        action="store",
                        type=str)
    parser.add_argument("--dt",
                        dest="DT_PATH",
                        help="Path to the DefinitelyTyped checkout holding notNeededPackages.json",
                        action="store",
                        type=str)
    parser.add_argument("--scope",
                        dest="SCOPE_NAME",
                        help="npm scope packages are published under (default: types)",
                        action="store",
                        type=str)
    parser.add_argument("--output-dir",
                        dest="OUTPUT_DIR",
                        help="Base directory for generated package output",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json)",
                        action="store",
                        type=str.lower,
                        choices=['text', 'json'],
                        default='text')
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    commands = parser.add_subparsers(dest="COMMAND", metavar="COMMAND", required=True)

    list_cmd = commands.add_parser("list", help="List packages in the catalog")
    list_group = list_cmd.add_mutually_exclusive_group()
    list_group.add_argument("--latest",
                            dest="LATEST",
                            help="Only the latest version of each package",
                            action="store_true")
    list_group.add_argument("--not-needed",
                            dest="NOT_NEEDED",
                            help="Only not-needed stub packages (requires --dt)",
                            action="store_true")
    list_group.add_argument("--all",
                            dest="ALL",
                            help="Every typings version followed by the not-needed stubs (requires --dt)",
                            action="store_true")

    for name, text in (
        ("resolve", "Resolve NAME[@VERSION] to a tracked version id"),
        ("info", "Show metadata of the package NAME[@VERSION] resolves to"),
        ("deps", "List the typings dependencies of NAME[@VERSION]"),
    ):
        cmd = commands.add_parser(name, help=text)
        cmd.add_argument("SPEC", help="Package name with optional @major[.minor] or @*")

    single = commands.add_parser("single", help="Read one single-version package without building the registry")
    single.add_argument("NAME", help="Package name")

    not_needed = commands.add_parser("not-needed", help="Show one not-needed stub package (requires --dt)")
    not_needed.add_argument("NAME", help="Package name")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
