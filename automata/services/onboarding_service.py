"""
Onboarding state service.

Keeps the pre-signup onboarding record: the business prompt, structured
context, up to 3 selections (templates plus an optional custom automation)
and the last recommendations shown. The record lives as one JSON blob under
one key of a KeyValueStore and expires 7 days after its last write.

Lifecycle:
- Empty -> save(prompt/context) -> in progress
- add_template / set_custom_automation (3 slots total) -> complete once a
  prompt and at least one selection exist
- clear() or expiry -> empty

Reads never fail: expired, version-mismatched, corrupt or structurally
invalid records are deleted and reported as absent (None).

The host's post-signup processor reads is_complete(),
get_selected_templates() and get_custom_automation(), creates the real
project and automations, then calls clear().
"""

import json
import logging
import math
import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from automata.config import settings
from automata.schemas.onboarding import (
    BusinessContext,
    BusinessContextUpdate,
    OnboardingRecord,
    OnboardingUpdate,
)
from automata.services.storage import JsonFileStore, KeyValueStore
from automata.utils.constants import DAY_MS, EXPIRY_DAYS, MAX_SELECTIONS, VERSION

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def _now_ms() -> int:
    return int(time.time() * 1000)


# =============================================================================
# MERGE RULES
# =============================================================================
# One rule per updatable field. Lists and scalars are replaced wholesale;
# business_context is merged field by field.
# =============================================================================

def _replace(current: Any, new: Any) -> Any:
    return new


def _replace_list(current: List[Any], new: List[Any]) -> List[Any]:
    return list(new)


def merge_business_context(current: BusinessContext, update: BusinessContextUpdate) -> BusinessContext:
    """Apply the fields explicitly set (and not None) on a context update."""
    changes = {
        name: list(value) if isinstance(value, list) else value
        for name, value in update.model_dump(exclude_unset=True).items()
        if value is not None
    }
    return current.model_copy(update=changes)


_MERGE_RULES: Dict[str, Callable[[Any, Any], Any]] = {
    "business_prompt": _replace,
    "custom_automation": _replace,
    "selected_templates": _replace_list,
    "ai_recommendations": _replace_list,
    "business_context": merge_business_context,
}


def merge_record(record: OnboardingRecord, update: OnboardingUpdate) -> OnboardingRecord:
    """Return a copy of `record` with the set fields of `update` merged in."""
    changes = {}
    for name in update.model_fields_set:
        value = getattr(update, name)
        if value is None:
            continue
        changes[name] = _MERGE_RULES[name](getattr(record, name), value)
    return record.model_copy(update=changes)


# =============================================================================
# STATE
# =============================================================================

class OnboardingState:
    """
    Versioned, expiring, capacity-limited onboarding record.

    Args:
        store: KeyValueStore holding the record (default: JsonFileStore at
            settings.ONBOARDING_STORAGE_PATH)
        key: Storage key (default: settings.ONBOARDING_STORAGE_KEY)
        clock: Callable returning the current time in epoch milliseconds
    """

    MAX_TEMPLATES = MAX_SELECTIONS

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        key: Optional[str] = None,
        clock: Optional[Clock] = None,
    ):
        self.store = store if store is not None else JsonFileStore(settings.ONBOARDING_STORAGE_PATH)
        self.key = key or settings.ONBOARDING_STORAGE_KEY
        self._clock = clock or _now_ms

    def _now(self) -> int:
        return int(self._clock())

    def _expiry_from(self, now: int) -> int:
        return now + EXPIRY_DAYS * DAY_MS

    def _default_record(self) -> OnboardingRecord:
        now = self._now()
        return OnboardingRecord(version=VERSION, created_at=now, expires_at=self._expiry_from(now))

    def _discard(self, reason: str) -> None:
        logger.info(f"Discarding onboarding state ({reason})")
        self.clear()

    # --- Core operations ---

    def get(self) -> Optional[OnboardingRecord]:
        """
        Load the current record.

        Returns None when nothing is stored. Records that are corrupt, carry
        another schema version, fail validation or have expired are deleted
        and also reported as None.
        """
        stored = self.store.get(self.key)
        if not stored:
            return None

        try:
            data = json.loads(stored)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Error reading onboarding data: {e}")
            self._discard("unparseable")
            return None

        if not isinstance(data, dict):
            self._discard("not an object")
            return None

        version = data.get("version")
        if isinstance(version, bool) or version != VERSION:
            self._discard(f"version {version!r} != {VERSION}")
            return None

        try:
            record = OnboardingRecord.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid onboarding data: {e.error_count()} validation errors")
            self._discard("invalid")
            return None

        if record.expires_at is not None and self._now() > record.expires_at:
            self._discard("expired")
            return None

        return record

    def save(
        self,
        updates: Union[OnboardingUpdate, Mapping[str, Any], None] = None,
    ) -> Optional[OnboardingRecord]:
        """
        Merge updates into the stored record (or a fresh one) and persist.

        `created_at` is kept from the existing record; `expires_at` always
        moves to now + 7 days.

        Args:
            updates: OnboardingUpdate or a mapping with camelCase or
                snake_case keys

        Returns:
            The merged record as persisted. A mapping that does not describe
            a valid update is logged and ignored: nothing is written and the
            current record (or None) is returned.
        """
        if isinstance(updates, OnboardingUpdate):
            update = updates
        else:
            try:
                update = OnboardingUpdate.model_validate(dict(updates or {}))
            except (ValidationError, TypeError, ValueError) as e:
                logger.warning(f"Ignoring invalid onboarding update: {type(e).__name__}")
                return self.get()

        existing = self.get() or self._default_record()
        merged = merge_record(existing, update)

        now = self._now()
        if merged.created_at is None:
            merged.created_at = now
        merged.expires_at = self._expiry_from(now)

        self.store.set(self.key, merged.model_dump_json(by_alias=True))
        logger.debug(f"Saved onboarding state: fields={sorted(update.model_fields_set)}")
        return merged

    def clear(self) -> None:
        """Delete the record. Safe to call when nothing is stored."""
        self.store.delete(self.key)

    # --- Progress checks ---

    def is_in_progress(self) -> bool:
        """True when a live record has a prompt or at least one selected template."""
        record = self.get()
        return record is not None and (
            record.business_prompt.strip() != "" or len(record.selected_templates) > 0
        )

    def is_complete(self) -> bool:
        """True when a live record has a prompt and at least one selection."""
        record = self.get()
        if record is None or record.business_prompt.strip() == "":
            return False
        return len(record.selected_templates) > 0 or record.custom_automation.strip() != ""

    # --- Selections ---

    def get_selected_templates(self) -> List[str]:
        record = self.get()
        return list(record.selected_templates) if record else []

    def get_custom_automation(self) -> str:
        record = self.get()
        return record.custom_automation if record else ""

    def get_selection_count(self) -> int:
        """Selected templates plus one for a non-empty custom automation."""
        record = self.get()
        if record is None:
            return 0
        return _selection_count(record)

    def can_add_more(self) -> bool:
        return self.get_selection_count() < MAX_SELECTIONS

    def add_template(self, template_id: str) -> bool:
        """
        Select a template.

        Returns True when the template is (now) selected, including when it
        already was. Returns False without changing anything when all 3
        selection slots are taken.
        """
        record = self.get() or self._default_record()

        if template_id in record.selected_templates:
            return True

        if _selection_count(record) >= MAX_SELECTIONS:
            logger.info(f"Selection limit reached, not adding template_id={template_id}")
            return False

        self.save(OnboardingUpdate(selected_templates=[*record.selected_templates, template_id]))
        logger.info(f"Template selected: template_id={template_id}")
        return True

    def remove_template(self, template_id: str) -> None:
        """Deselect a template. No-op when no record exists."""
        record = self.get()
        if record is None:
            return

        remaining = [tid for tid in record.selected_templates if tid != template_id]
        self.save(OnboardingUpdate(selected_templates=remaining))

    def toggle_template(self, template_id: str) -> bool:
        """Deselect (returns False) if selected, otherwise add_template()."""
        record = self.get()
        if record is not None and template_id in record.selected_templates:
            self.remove_template(template_id)
            return False
        return self.add_template(template_id)

    def set_custom_automation(self, description: Optional[str]) -> None:
        """
        Store the custom automation description (trimmed).

        Unlike add_template() this never refuses: the UI checks
        can_add_more() before letting the user fill the custom slot.
        """
        self.save(OnboardingUpdate(custom_automation=(description or "").strip()))

    # --- Prompt, context and cached recommendations ---

    def set_business_prompt(self, prompt: Optional[str]) -> None:
        self.save(OnboardingUpdate(business_prompt=prompt or ""))

    def set_business_context(
        self,
        context: Union[BusinessContext, BusinessContextUpdate, Mapping[str, Any]],
    ) -> None:
        """Merge structured context; only the fields given are replaced."""
        if isinstance(context, BusinessContextUpdate):
            update = context
        elif isinstance(context, BusinessContext):
            update = BusinessContextUpdate.model_validate(context.model_dump())
        else:
            update = BusinessContextUpdate.model_validate(dict(context))
        self.save(OnboardingUpdate(business_context=update))

    def set_recommendations(self, recommendations: Iterable[Union[BaseModel, Mapping[str, Any]]]) -> None:
        """Cache the last recommendation list (stored as camelCase dicts)."""
        cached = [
            rec.model_dump(by_alias=True) if isinstance(rec, BaseModel) else dict(rec)
            for rec in recommendations
        ]
        self.save(OnboardingUpdate(ai_recommendations=cached))

    # --- Expiry ---

    def get_days_until_expiry(self) -> int:
        """Whole days (rounded up) until the record expires; 0 when absent."""
        record = self.get()
        if record is None or record.expires_at is None:
            return 0
        remaining_ms = record.expires_at - self._now()
        return max(0, math.ceil(remaining_ms / DAY_MS))


def _selection_count(record: OnboardingRecord) -> int:
    has_custom = 1 if record.custom_automation.strip() else 0
    return len(record.selected_templates) + has_custom


# =============================================================================
# PROJECT NAMING (used by the post-signup processor)
# =============================================================================

PROJECT_NAMES = {
    "food": "My Restaurant",
    "retail": "My Store",
    "health": "My Practice",
    "service": "My Business",
    "technology": "My Tech Company",
    "education": "My School",
}

DEFAULT_PROJECT_NAME = "My Business"


def generate_project_name(business_context: Union[BusinessContext, Mapping[str, Any], None]) -> str:
    """Default project name for the industry chosen during onboarding."""
    if business_context is None:
        return DEFAULT_PROJECT_NAME

    if isinstance(business_context, BusinessContext):
        industry = business_context.industry
    else:
        industry = business_context.get("industry")

    if not isinstance(industry, str):
        return DEFAULT_PROJECT_NAME
    return PROJECT_NAMES.get(industry, DEFAULT_PROJECT_NAME)
