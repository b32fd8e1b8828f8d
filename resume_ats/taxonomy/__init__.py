from functools import lru_cache

from resume_ats.core.config import settings

from .local_taxonomy import LocalTaxonomy
from .provider import TaxonomyProvider


@lru_cache(maxsize=1)
def get_default_taxonomy_provider() -> TaxonomyProvider:
    """Process-wide synonym table; ``TAXONOMY_SYNONYMS_PATH`` swaps in a custom file."""
    return LocalTaxonomy(settings.taxonomy_synonyms_path)


__all__ = ["TaxonomyProvider", "LocalTaxonomy", "get_default_taxonomy_provider"]
