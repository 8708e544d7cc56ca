"""jwtsites: resolve per-site token verification settings into verifiers."""

from .algorithms import AlgorithmFamily, classify
from .config import ResolverConfig, load_config
from .loader import load_sites, load_sites_file
from .models import SiteConfiguration, SiteRecord
from .resolver import (
    DEFAULT_SITE,
    ResolutionResult,
    SiteRejection,
    SiteResolver,
    get_site_verifiers,
)
from .verifiers import SiteVerifier

__version__ = "0.1.0"
__all__ = [
    "AlgorithmFamily",
    "DEFAULT_SITE",
    "ResolutionResult",
    "ResolverConfig",
    "SiteConfiguration",
    "SiteRecord",
    "SiteRejection",
    "SiteResolver",
    "SiteVerifier",
    "classify",
    "get_site_verifiers",
    "load_config",
    "load_sites",
    "load_sites_file",
]
