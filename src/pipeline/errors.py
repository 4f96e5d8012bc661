"""Exceptions raised by the build pipeline and its offline host."""


class VlpError(Exception):
    """Base class for all errors raised by vlp."""


class PhaseOrderError(VlpError):
    """A lifecycle phase was invoked out of order or more than once."""


class OutputRootError(VlpError):
    """No output directory could be determined; no phase can write anything."""


class ConfigError(VlpError):
    """A playbook or component descriptor could not be read."""
