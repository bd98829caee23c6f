"""
Catalog Backend - Translation Service
=======================================

What:  Resolves language codes to translation bundles, loads bundles from
       disk and attaches localized labels/descriptions to tags.
How:   A constant language table picks the bundle directory; the bundle is
       read with aiofiles and parsed as JSON; each tag is looked up by its
       canonical name in the bundle's `resources` mapping.
Who:   Called by TagService when a listing asks for translations.

Bundle Layout:
    translations/
    ├── _source/tags-character.json     ← default language
    ├── pt-br/tags-character.json
    └── fr-fr/tags-character.json

    {
        "resources": {
            "fire-arrow": {"name": "Flèche de feu", "description": "..."},
            "brave": "Plain description, label stays canonical"
        }
    }

Failure Policy:
    A missing, unreadable or malformed bundle is logged as a warning and
    treated as "no bundle": every tag keeps its canonical name as label and
    gets a null description. Enrichment never fails a listing.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiofiles
import aiofiles.os

from app.config import settings
from app.schemas.tag import TagItem

logger = logging.getLogger(__name__)

# Only character tag translations exist for now; every tag type reads this file
TAG_TRANSLATION_RESOURCE = "tags-character.json"

# Bundle used for the source language and for any unknown code
FALLBACK_BUNDLE = "_source"

# Lower-cased language code → bundle directory
LANGUAGE_BUNDLES: Dict[str, str] = {
    "pt-br": "pt-br",
    "pt": "pt-br",
    "en": FALLBACK_BUNDLE,
    "en-us": FALLBACK_BUNDLE,
    "en-gb": FALLBACK_BUNDLE,
    "es-es": "es-es",
    "es": "es-es",
    "fr-fr": "fr-fr",
    "fr": "fr-fr",
    "de-de": "de-de",
    "de": "de-de",
    "zh-cn": "zh-cn",
    "zh": "zh-cn",
    "hi-in": "hi-in",
    "hi": "hi-in",
    "ar-sa": "ar-sa",
    "ar": "ar-sa",
    "ru-ru": "ru-ru",
    "ru": "ru-ru",
    "ja-jp": "ja-jp",
    "ja": "ja-jp",
    "ko-kr": "ko-kr",
    "ko": "ko-kr",
    "it-it": "it-it",
    "it": "it-it",
}


def resolve_bundle(lang: Optional[str]) -> str:
    """Map a free-form language code to its bundle directory (case-insensitive)."""
    return LANGUAGE_BUNDLES.get((lang or "").lower(), FALLBACK_BUNDLE)


def resolve_entry(name: str, entry: Any) -> Tuple[str, Optional[str]]:
    """
    Derive (label, description) for a tag from its bundle entry.

    - absent/empty entry  → (name, None)
    - plain string        → (name, entry)
    - mapping             → (entry["name"] or name, entry["description"] or None)
    - anything else       → (name, None)
    """
    if not entry:
        return name, None
    if isinstance(entry, str):
        return name, entry
    if isinstance(entry, dict):
        label = entry.get("name")
        description = entry.get("description")
        return (
            label if isinstance(label, str) and label else name,
            description if isinstance(description, str) and description else None,
        )
    return name, None


class TranslationService:
    """
    Loads tag translation bundles and enriches tag listings.

    The optional cache keeps one parsed `resources` mapping per bundle and
    revalidates it against the file's modification time on every lookup.
    """

    def __init__(
        self,
        translations_root: Optional[str] = None,
        cache_enabled: Optional[bool] = None,
    ):
        """
        Args:
            translations_root: Override settings.translations_root (used in tests).
            cache_enabled: Override settings.translation_cache_enabled.
        """
        self.translations_root = Path(translations_root or settings.translations_root)
        self.cache_enabled = (
            settings.translation_cache_enabled if cache_enabled is None else cache_enabled
        )
        self._cache: Dict[str, Tuple[float, Optional[Dict[str, Any]]]] = {}

    def bundle_path(self, bundle: str) -> Path:
        return (self.translations_root / bundle / TAG_TRANSLATION_RESOURCE).resolve()

    async def load_resources(self, bundle: str) -> Optional[Dict[str, Any]]:
        """
        Read the bundle's `resources` mapping.

        Returns None when the file is missing, unreadable, not valid JSON, or
        has no non-empty `resources` mapping. Never raises for those cases.
        """
        path = self.bundle_path(bundle)
        mtime = 0.0
        try:
            if self.cache_enabled:
                mtime = (await aiofiles.os.stat(path)).st_mtime
                cached = self._cache.get(bundle)
                if cached is not None and cached[0] == mtime:
                    return cached[1]

            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
            document = json.loads(raw)
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logger.warning(
                "Tag translation file missing or invalid: %s (%s)",
                path,
                type(e).__name__,
                extra={"translations_path": str(path)},
            )
            self._cache.pop(bundle, None)
            return None

        resources = document.get("resources") if isinstance(document, dict) else None
        if not isinstance(resources, dict) or not resources:
            logger.debug("Translation bundle %s has no resources", path)
            resources = None

        if self.cache_enabled:
            self._cache[bundle] = (mtime, resources)
        return resources

    def enrich(
        self,
        tags: Sequence[Any],
        resources: Optional[Dict[str, Any]],
    ) -> List[TagItem]:
        """Build TagItems with label/description explicitly set on every item."""
        items = []
        for tag in tags:
            entry = resources.get(tag.name) if resources else None
            label, description = resolve_entry(tag.name, entry)
            items.append(TagItem.from_tag(tag, label=label, description=description))
        return items

    async def enrich_tags(self, tags: Sequence[Any], lang: Optional[str]) -> List[TagItem]:
        """resolve → load → enrich, for one page of tags."""
        bundle = resolve_bundle(lang)
        resources = await self.load_resources(bundle)
        logger.debug(
            "Enriching %d tags from bundle %s (%s)",
            len(tags),
            bundle,
            "loaded" if resources else "unavailable",
        )
        return self.enrich(tags, resources)


# ── Singleton Instance ────────────────────────────────────────────────────
translation_service = TranslationService()
