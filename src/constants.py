"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2
    EXIT_WARNINGS = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Pointer names and the files written next to them
    LATEST_SYMLINK = "latest"
    DEV_SYMLINK = "dev"
    LATEST_DEV_FILE = "latest_dev.txt"

    # Non-versioned component pool, never resolved
    SHARED_COMPONENT = "shared"

    # Site layout
    DEFAULT_OUTPUT_DIR = "build/site"
    ENTRY_PAGE = "index.html"
    ENTRY_PAGE_BACKUP_SUFFIX = ".bak"
    ASCIIDOC_MEDIA_TYPE = "text/asciidoc"
    NAV_BASENAME = "nav.adoc"
    COMPONENT_DESCRIPTOR_FILE = "antora.yml"

    # Host lifecycle event names
    EVENT_CONFIGURED = "playbookBuilt"
    EVENT_CLASSIFIED = "contentClassified"
    EVENT_PUBLISHED = "sitePublished"

    # Environment toggles
    ENV_DEBUG = "VLP_DEBUG"
    ENV_LOG_LEVEL = "VLP_LOG_LEVEL"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    DEBUG_PREFIX = "[vlp]"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
