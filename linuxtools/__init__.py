"""Linux Tools — Ubuntu installer script orchestrator"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("linux-tools")
except PackageNotFoundError:
    __version__ = "dev"
