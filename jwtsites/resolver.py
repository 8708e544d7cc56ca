"""Resolve site settings into a mapping of site key to verifier.

Sites are processed in document order. A failing site is logged and skipped;
only a broken document or an unsupported schema version discards the whole
configuration, in which case the mapping is empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .algorithms import AlgorithmFamily, classify
from .config import ResolverConfig
from .decoding import decode_key_material
from .exceptions import (
    ConfigurationFatal,
    DuplicateDefault,
    DuplicateIdentifier,
    InvalidAlgorithm,
    MissingIdentifier,
    SiteRejected,
    UnsupportedSchemaVersion,
)
from .keysource import resolve_key_source
from .loader import Source, load_sites
from .models import SiteConfiguration, SiteRecord
from .verifiers import SiteVerifier, build_verifier

logger = logging.getLogger(__name__)

DEFAULT_SITE = "default"


@dataclass(frozen=True)
class SiteRejection:
    """Why a site declaration was skipped."""

    index: int
    site: str
    reason: str
    detail: str


@dataclass
class ResolutionState:
    """Accumulator threaded through a single resolution pass."""

    verifiers: Dict[str, SiteVerifier] = field(default_factory=dict)
    rejections: List[SiteRejection] = field(default_factory=list)
    default_accepted: bool = False


@dataclass
class ResolutionResult:
    """Outcome of resolving one settings document."""

    verifiers: Dict[str, SiteVerifier] = field(default_factory=dict)
    rejections: List[SiteRejection] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def default(self) -> Optional[SiteVerifier]:
        return self.verifiers.get(DEFAULT_SITE)


class SiteResolver:
    """Turns a settings document into per-site verifiers."""

    def __init__(
        self,
        base_dir: Union[str, Path, None] = None,
        config: Optional[ResolverConfig] = None,
    ) -> None:
        if base_dir is None:
            base_dir = (config or ResolverConfig()).effective_base_dir()
        self.base_dir = Path(base_dir)

    def resolve(
        self,
        source: Union[Source, SiteConfiguration],
        fmt: Optional[str] = None,
    ) -> ResolutionResult:
        """Resolve ``source`` without ever raising on bad settings."""
        try:
            if isinstance(source, SiteConfiguration):
                configuration = source
            else:
                configuration = load_sites(source, fmt)
            if not configuration.supported:
                raise UnsupportedSchemaVersion(configuration.version)
        except ConfigurationFatal as e:
            logger.error(
                f"Error loading site settings: {e}. Aborting.",
                extra={"reason": type(e).__name__},
            )
            return ResolutionResult(error=str(e))

        state = ResolutionState()
        for index, site in enumerate(configuration.sites):
            self._process(index, site, state)

        logger.info(
            f"Resolved {len(state.verifiers)} site(s), "
            f"rejected {len(state.rejections)}"
        )
        return ResolutionResult(
            verifiers=state.verifiers, rejections=state.rejections
        )

    def _process(self, index: int, site: SiteRecord, state: ResolutionState) -> None:
        try:
            name, verifier = self.resolve_site(site, state)
        except SiteRejected as e:
            label = e.site or site.label
            logger.error(
                f"{e.reason}: {e.detail} Site {label} ignored.",
                extra={"reason": e.reason, "site": label, "key_path": site.path},
            )
            state.rejections.append(SiteRejection(index, label, e.reason, e.detail))
            return

        if site.default:
            state.default_accepted = True
        state.verifiers[name] = verifier
        logger.debug(f"Site {site.label} registered with {verifier.algorithm}")

    def resolve_site(
        self, site: SiteRecord, state: ResolutionState
    ) -> Tuple[str, SiteVerifier]:
        """Run the validation steps for one site in their fixed order.

        Returns the mapping key and verifier; ``state`` is only read.

        Raises:
            SiteRejected: A subclass naming the first failed check.
        """

        source = resolve_key_source(site, self.base_dir)

        family = classify(site.algorithm)
        if family is AlgorithmFamily.INVALID:
            raise InvalidAlgorithm(f"Invalid algorithm selection: {site.algorithm!r}.")

        material = decode_key_material(family, site.encoding, source)
        verifier = build_verifier(family, site.algorithm, material)

        if not site.url and not site.default:
            raise MissingIdentifier("Site URL must be defined for non-default sites.")

        if site.default:
            if state.default_accepted:
                raise DuplicateDefault(
                    "Multiple default sites specified in configuration."
                )
            return DEFAULT_SITE, verifier

        if site.url == DEFAULT_SITE:
            raise DuplicateIdentifier(
                f"Site URL {DEFAULT_SITE!r} is reserved for the default site."
            )
        if site.url in state.verifiers:
            raise DuplicateIdentifier(f"Site URL {site.url} is already configured.")
        return site.url, verifier


def get_site_verifiers(
    source: Union[Source, SiteConfiguration],
    base_dir: Union[str, Path, None] = None,
    fmt: Optional[str] = None,
) -> Dict[str, SiteVerifier]:
    """Return the site key to verifier mapping for a settings document."""
    return SiteResolver(base_dir).resolve(source, fmt).verifiers


__all__ = [
    "DEFAULT_SITE",
    "ResolutionResult",
    "ResolutionState",
    "SiteRejection",
    "SiteResolver",
    "get_site_verifiers",
]
