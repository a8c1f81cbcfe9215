"""
pump_decoder.units

Stroke to insulin-unit conversion. Basal delivery is always metered at 40
strokes per unit; the bolus rate depends on the pump generation.
"""

from pump_decoder.device_type import DecodingContext

BASAL_STROKES_PER_UNIT = 40


def get_strokes_per_unit(context: DecodingContext, is_basal: bool) -> float:
    return float(BASAL_STROKES_PER_UNIT) if is_basal else float(context.bolus_strokes)


def decode_basal_insulin(raw: int) -> float:
    return raw / float(BASAL_STROKES_PER_UNIT)


def decode_bolus_insulin(raw: int, context: DecodingContext) -> float:
    return raw / get_strokes_per_unit(context, is_basal=False)
