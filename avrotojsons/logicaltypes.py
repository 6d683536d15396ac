"""
Mapping of Avro logical types to JSON Schema type/format pairs.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

JAVA_TYPE_HINT_KEY = 'javaType'

# tag -> (JSON type, JSON format, Java type hint)
LOGICAL_TYPE_MAPPING: Dict[str, tuple] = {
    'decimal': ('number', None, 'java.math.BigDecimal'),
    'timestamp-millis': ('integer', 'utc-millisec', 'java.time.Instant'),
    'timestamp-micros': ('integer', 'utc-millisec', 'java.time.Instant'),
    'date': ('string', 'date', 'java.time.LocalDate'),
    'time-millis': ('string', 'time', 'java.time.LocalTime'),
    'time-micros': ('string', 'time', 'java.time.LocalTime'),
    'uuid': ('string', 'uuid', 'java.util.UUID'),
    'duration': ('string', 'duration', 'java.time.Duration'),
}


def map_logical_type(logical_type: str, java_type_hints: bool = False) -> Optional[Dict[str, Any]]:
    """
    Map an Avro logical type to the JSON Schema keys it determines.

    Args:
        logical_type (str): The logical type tag, e.g. 'uuid'.
        java_type_hints (bool): Whether to add the 'javaType' hint.

    Returns:
        Optional[Dict[str, Any]]: The JSON Schema keys in canonical order, or
        None if the tag is not recognized.
    """
    mapping = LOGICAL_TYPE_MAPPING.get(logical_type)
    if mapping is None:
        logger.debug("Unrecognized logical type '%s', using the underlying type", logical_type)
        return None
    json_type, json_format, java_type = mapping
    json_schema: Dict[str, Any] = {'type': json_type}
    if json_format:
        json_schema['format'] = json_format
    if java_type_hints:
        json_schema[JAVA_TYPE_HINT_KEY] = java_type
    return json_schema
