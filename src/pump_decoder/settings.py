"""
pump_decoder.settings

Decoding of the pump settings responses into named, grouped settings.

The byte layouts are data, not code: `config/settings_layout.yml` lists every
field with its offset, width, rendering rule, and the conditions under which
it is present. Two layouts are bundled:

    - settings_512: the legacy layout (512/712 and older generations)
    - settings: extends settings_512 with the reservoir, keypad and
      523-and-higher fields

Functions:
    - load_settings_layouts: Load and validate a layout file, resolving `extends`
    - decode_setting_field: Decode one field, or None if it is gated out
    - decode_settings_layout: Decode a whole buffer with a layout
    - decode_settings_512 / decode_settings: the two settings responses
"""

import functools
import logging
import os
from importlib import resources
from types import MappingProxyType
from typing import Dict, List, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from common.models import PumpConfigurationGroup, PumpSetting
from pump_decoder.device_type import DecodingContext
from pump_decoder.decode import get_uint8, get_uint16, require_length
from pump_decoder.exceptions import SettingsLayoutError
from pump_decoder.units import decode_basal_insulin, decode_bolus_insulin

logger = logging.getLogger(__name__)

LEGACY_LAYOUT = "settings_512"
EXTENDED_LAYOUT = "settings"

ENABLE_VALUES = {0: "No", 1: "Yes"}
UNRECOGNIZED_VALUE = "???"


def _default_layout_path() -> str:
    """Path of the settings layout file bundled as package data."""
    return str(resources.files(__package__) / "config" / "settings_layout.yml")


class FieldCondition(BaseModel):
    """Matches when the byte at `offset` equals `equals`."""

    offset: int = Field(ge=0)
    equals: int

    def matches(self, data: bytes) -> bool:
        require_length(data, self.offset + 1, "settings condition")
        return get_uint8(data, self.offset) == self.equals


class SettingField(BaseModel):
    key: str
    offset: int = Field(ge=0)
    width: Literal[1, 2] = 1
    rule: Literal["number", "enable", "enum", "bolus_units", "basal_units"]
    group: PumpConfigurationGroup
    enum: Optional[Dict[int, str]] = None
    default: Optional[str] = None
    when: Optional[FieldCondition] = None
    unless: Optional[FieldCondition] = None
    device_family: Optional[Literal["523_and_higher", "below_523", "512_712", "not_512_712"]] = (
        None
    )


class SettingsLayout(BaseModel):
    name: str
    extends: Optional[str] = None
    fields: List[SettingField] = Field(default_factory=list)


def load_settings_layouts(path_override: str | None = None) -> Dict[str, SettingsLayout]:
    """
    Load the settings layouts and flatten `extends` chains.

    Args:
        path_override (str | None): Optional path to a layout YAML file. If it is
            missing or unreadable the bundled file is used instead.

    Returns:
        dict[str, SettingsLayout]: layout name -> layout with inherited fields first.

    Raises:
        SettingsLayoutError: if the file is structurally invalid or lacks the
            settings_512 or settings layout.
    """
    layout_path = _default_layout_path()
    if path_override:
        if os.path.exists(path_override) and os.access(path_override, os.R_OK):
            logger.info(f"Using settings layout override: {path_override}")
            layout_path = path_override
        else:
            logger.warning(
                f"Settings layout override path provided but not found/readable: "
                f"{path_override}. Using default: {layout_path}"
            )

    with open(layout_path) as f:
        raw_layouts = (yaml.safe_load(f) or {}).get("layouts", {})

    if not isinstance(raw_layouts, dict) or not raw_layouts:
        raise SettingsLayoutError(f"No layouts defined in {layout_path}")

    declared: Dict[str, SettingsLayout] = {}
    for name, body in raw_layouts.items():
        try:
            layout = SettingsLayout(name=name, **(body or {}))
        except (TypeError, ValidationError) as e:
            raise SettingsLayoutError(f"Invalid settings layout '{name}': {e}") from e
        for field in layout.fields:
            if field.rule == "enum" and field.default is None:
                raise SettingsLayoutError(
                    f"Layout '{name}': enum field {field.key} needs a default"
                )
        declared[name] = layout

    resolved: Dict[str, SettingsLayout] = {}

    def resolve(name: str, chain: tuple) -> SettingsLayout:
        if name in resolved:
            return resolved[name]
        if name not in declared:
            raise SettingsLayoutError(f"Unknown settings layout '{name}'")
        if name in chain:
            raise SettingsLayoutError(f"Cyclic settings layout: {' -> '.join(chain + (name,))}")
        layout = declared[name]
        fields = list(layout.fields)
        if layout.extends:
            fields = list(resolve(layout.extends, chain + (name,)).fields) + fields
        resolved[name] = SettingsLayout(name=name, extends=layout.extends, fields=fields)
        return resolved[name]

    for name in declared:
        resolve(name, ())

    missing = [name for name in (LEGACY_LAYOUT, EXTENDED_LAYOUT) if name not in resolved]
    if missing:
        raise SettingsLayoutError(
            f"Layout file {layout_path} is missing layouts: {', '.join(missing)}"
        )

    logger.debug(f"Loaded {len(resolved)} settings layouts from {layout_path}")
    return resolved


@functools.lru_cache(maxsize=1)
def default_settings_layouts() -> Mapping[str, SettingsLayout]:
    """Bundled layouts, loaded once and shared read-only."""
    return MappingProxyType(load_settings_layouts())


def parse_result_enable(value: int) -> str:
    return ENABLE_VALUES.get(value, UNRECOGNIZED_VALUE)


def _family_matches(device_family: Optional[str], context: DecodingContext) -> bool:
    if device_family is None:
        return True
    if device_family == "523_and_higher":
        return context.is_523_or_higher
    if device_family == "below_523":
        return not context.is_523_or_higher
    if device_family == "512_712":
        return context.is_512_712
    return not context.is_512_712


def decode_setting_field(
    field: SettingField, data: bytes, context: DecodingContext
) -> Optional[PumpSetting]:
    """
    Decode one settings field.

    Returns None when the field does not apply to this buffer or generation.
    """
    if not _family_matches(field.device_family, context):
        return None
    if field.when is not None and not field.when.matches(data):
        return None
    if field.unless is not None and field.unless.matches(data):
        return None

    require_length(data, field.offset + field.width, field.key)
    raw = get_uint16(data, field.offset) if field.width == 2 else get_uint8(data, field.offset)

    if field.rule == "number":
        value = str(raw)
    elif field.rule == "enable":
        value = parse_result_enable(raw)
    elif field.rule == "enum":
        value = (field.enum or {}).get(raw)
        if value is None:
            value = field.default.format(value=raw)
    elif field.rule == "bolus_units":
        value = str(decode_bolus_insulin(raw, context))
    else:
        value = str(decode_basal_insulin(raw))

    return PumpSetting(key=field.key, value=value, group=field.group)


def decode_settings_layout(
    layout: SettingsLayout, data: bytes, context: DecodingContext
) -> Dict[str, PumpSetting]:
    settings: Dict[str, PumpSetting] = {}
    for field in layout.fields:
        setting = decode_setting_field(field, data, context)
        if setting is not None:
            settings[setting.key] = setting
    logger.debug(f"Decoded {len(settings)} settings with layout '{layout.name}'")
    return settings


def decode_settings_512(
    data: bytes,
    context: DecodingContext,
    layouts: Optional[Mapping[str, SettingsLayout]] = None,
) -> Dict[str, PumpSetting]:
    """Decode a legacy (512-style) settings response."""
    layouts = layouts or default_settings_layouts()
    return decode_settings_layout(layouts[LEGACY_LAYOUT], data, context)


def decode_settings(
    data: bytes,
    context: DecodingContext,
    layouts: Optional[Mapping[str, SettingsLayout]] = None,
) -> Dict[str, PumpSetting]:
    """Decode an extended settings response (legacy fields plus offsets 18-24)."""
    layouts = layouts or default_settings_layouts()
    return decode_settings_layout(layouts[EXTENDED_LAYOUT], data, context)
