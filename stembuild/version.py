"""Version of the running stembuild."""

from importlib.metadata import PackageNotFoundError, version

DEV_VERSION = "dev"


class VersionGetter:
    def __init__(self, distribution="stembuild"):
        self.distribution = distribution

    def get_version(self):
        """Installed distribution version, or "dev" for an uninstalled tree."""
        try:
            return version(self.distribution)
        except PackageNotFoundError:
            return DEV_VERSION
