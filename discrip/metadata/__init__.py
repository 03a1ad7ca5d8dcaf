"""Metadata lookups used to name ripped files."""

from discrip.metadata.providers import (
    MetadataProvider,
    OmdbProvider,
    TmdbProvider,
    build_providers,
)
from discrip.metadata.service import MetadataService
from discrip.metadata.variations import title_variations
