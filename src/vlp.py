"""vlp - latest/prerelease pointers for version-partitioned documentation sites

Replays the configure, classify and publish phases against a site that has
already been generated, e.g. after it was copied somewhere the pointer
links did not survive.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from args import parse_args
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from offline.catalog import discover_component_descriptors, load_component_descriptors
from offline.playbook import load_playbook
from pipeline.errors import ConfigError
from pipeline.phases import Pipeline


def collect_descriptor_paths(args):
    """Gathers the component descriptor files named on the command line.

    Args:
        args (argparse.Namespace): Parsed arguments.

    Returns:
        list: Paths of antora.yml files.
    """
    if args.COMPONENTS:
        return list(args.COMPONENTS)
    paths = []
    for dir_name in args.FROM_SRC or []:
        paths.extend(discover_component_descriptors(dir_name, args.RECURSIVE))
    return paths


def export_json(report, path):
    """Exports the build report to a JSON file.

    Args:
        report (BuildReport): Outcome of the build.
        path (str): File path to export the JSON.
    """
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(report.to_dict(), file, ensure_ascii=False, indent=4)
        logging.info("JSON report has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON report couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _log_summary(report):
    for name, resolution in sorted(report.resolutions.items()):
        logging.info(
            "%s: latest=%s dev=%s",
            name,
            resolution.stable.label if resolution.stable else "-",
            resolution.prerelease.label if resolution.prerelease else "-",
        )
    created = sum(1 for link in report.links if link.outcome.ok)
    logging.info("%d of %d pointer link(s) in place", created, len(report.links))
    if report.entry_page is not None:
        logging.info("Entry page: %s", report.entry_page.value)


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    # Honor CLI --loglevel by passing it to centralized logger via env
    if args.LOG_LEVEL:
        os.environ[Constants.ENV_LOG_LEVEL] = args.LOG_LEVEL
    configure_logging(logfile=args.LOG_FILE)
    # Ensure runtime CLI flag wins over VLP_DEBUG
    if args.LOG_LEVEL:
        logging.getLogger().setLevel(getattr(logging, args.LOG_LEVEL, logging.INFO))
    if args.QUIET:
        logging.getLogger().setLevel(logging.ERROR)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        playbook = load_playbook(args.PLAYBOOK)
        descriptor_paths = collect_descriptor_paths(args)
        if not descriptor_paths:
            logging.warning("No component descriptors found.")
        catalog = load_component_descriptors(descriptor_paths)
    except ConfigError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)

    context = Pipeline().run(playbook, catalog)

    report = context.report
    _log_summary(report)

    if args.OUTPUT:
        export_json(report, args.OUTPUT)

    if report.has_warnings():
        logging.warning("One or more items were skipped or failed.")
        if args.ERROR_ON_WARNINGS:
            logging.error("Warnings present, exiting with non-zero status code.")
            sys.exit(ExitCodes.EXIT_WARNINGS.value)

    sys.exit(ExitCodes.SUCCESS.value)

if __name__ == "__main__":
    main()
