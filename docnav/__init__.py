"""Documentation navigation compiler: frontmatter to manifests to a navigation tree."""

from .config import ConfigError, DocNavConfig, load_config
from .diagnostics import Diagnostic, Diagnostics
from .flatten import compute_stats, flatten_navigation
from .frontmatter import extract_frontmatter
from .meta import MetaSynthesizer
from .navigation import NavigationBuilder
from .pipeline import BuildPipeline, BuildResult
from .scanner import DocsRootNotFoundError

__all__ = [
    "BuildPipeline",
    "BuildResult",
    "ConfigError",
    "Diagnostic",
    "Diagnostics",
    "DocNavConfig",
    "DocsRootNotFoundError",
    "MetaSynthesizer",
    "NavigationBuilder",
    "compute_stats",
    "extract_frontmatter",
    "flatten_navigation",
    "load_config",
]
