"""Argument parsing functionality for vlp."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="vlp",
        description=(
            "vlp - point 'latest' and 'dev' at the newest stable and prerelease "
            "versions of every component of a published documentation site"
        ),
        add_help=True,
    )

    parser.add_argument("-p", "--playbook",
                        dest="PLAYBOOK",
                        help="Site playbook (YAML) providing output.dir and site.start_page",
                        action="store", type=str,
                        required=True)

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("-c", "--component",
                        dest="COMPONENTS",
                        help=f"Component descriptor ({Constants.COMPONENT_DESCRIPTOR_FILE}); may be repeated",
                        action="append", type=str)
    input_group.add_argument("-d", "--directory",
                    dest="FROM_SRC",
                    help=f"Find {Constants.COMPONENT_DESCRIPTOR_FILE} files in a content source directory",
                    action="append",
                    type=str)

    parser.add_argument("-r", "--recursive",
                        dest="RECURSIVE",
                        help="Recursively scan directories for component descriptors.",
                        action="store_true")
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to a JSON build report",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=Constants.LOG_LEVELS,
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if any item was skipped or failed.",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log errors to the console.",
                        action="store_true")

    return parser.parse_args(argv)
