"""
Common Avro schema helpers for avrotojsons.
"""

import json
from typing import Any, Dict, List, Union

from avrotojsons.errors import SchemaParseError

AvroSchema = Union[str, Dict[str, Any], List[Any]]

PRIMITIVE_TYPES = ['null', 'boolean', 'int', 'long', 'float', 'double', 'bytes', 'string']
NAMED_TYPES = ['record', 'error', 'enum', 'fixed']
COMPLEX_TYPES = ['record', 'error', 'enum', 'fixed', 'array', 'map']

# Kinds that map onto a single JSON Schema primitive type name
JSON_PRIMITIVE_NAMES: Dict[str, str] = {
    'string': 'string',
    'int': 'integer',
    'long': 'integer',
    'float': 'number',
    'double': 'number',
    'boolean': 'boolean',
    'null': 'null',
    'bytes': 'string',
}

# Attributes with a defined meaning in Avro
AVRO_RESERVED_ATTRIBUTES = {'type', 'name', 'namespace', 'fields', 'doc', 'aliases',
                            'symbols', 'items', 'values', 'size', 'default'}
# Avro plumbing that must not leak into the JSON Schema output
AVRO_INTERNAL_PROPS = {'logicalType', 'precision', 'scale', 'connect.parameters'}


def parse_avro_schema_text(avro_schema_text: str) -> AvroSchema:
    """
    Parse Avro schema JSON text into its JSON tree.

    Raises:
        SchemaParseError: If the text is not valid JSON or not a schema construct.
    """
    try:
        avro_schema = json.loads(avro_schema_text)
    except json.JSONDecodeError as e:
        raise SchemaParseError(f"Invalid Avro schema JSON: {e.msg}",
                               context=f"line {e.lineno}, column {e.colno}", cause=e) from e
    if not isinstance(avro_schema, (str, dict, list)):
        raise SchemaParseError(f"Avro schema must be a string, object or array, not {type(avro_schema).__name__}")
    return avro_schema


def fullname(avro_schema: dict | str, parent_namespace: str = '') -> str:
    """
    Constructs the full name of a named Avro type or of a type reference.

    Args:
        avro_schema (dict | str): The named schema, or a name referencing one.
        parent_namespace (str): The namespace of the enclosing named type.

    Returns:
        str: The full name.
    """
    if isinstance(avro_schema, str):
        if '.' not in avro_schema and parent_namespace:
            return parent_namespace + '.' + avro_schema
        return avro_schema
    name = avro_schema.get('name', '')
    if '.' in name:
        return name
    namespace = avro_schema.get('namespace', parent_namespace)
    return namespace + '.' + name if namespace else name


def namespace_of(qualified_name: str) -> str:
    """Returns the namespace part of a full name."""
    return qualified_name.rsplit('.', 1)[0] if '.' in qualified_name else ''


def local_name(qualified_name: str) -> str:
    """Returns the name without its namespace."""
    return qualified_name.rsplit('.', 1)[-1]


def avro_kind(avro_schema: AvroSchema) -> str:
    """
    Returns the kind of an Avro schema node: a primitive or complex type
    name, 'union' for lists, or the referenced name for named references.
    Annotated objects such as {"type": "string", "logicalType": "uuid"}
    report the kind of their 'type'.
    """
    if isinstance(avro_schema, list):
        return 'union'
    if isinstance(avro_schema, dict):
        if 'type' not in avro_schema:
            raise SchemaParseError("Avro schema object is missing the 'type' attribute",
                                   context=json.dumps(avro_schema)[:80])
        return avro_kind(avro_schema['type'])
    return avro_schema


def is_nullable(avro_type: AvroSchema) -> bool:
    """
    Check if a given Avro type admits null: the null type itself or
    a union with a null member.
    """
    if isinstance(avro_type, dict) and isinstance(avro_type.get('type'), (dict, list)):
        return is_nullable(avro_type['type'])
    if isinstance(avro_type, list):
        return any(avro_kind(t) == 'null' for t in avro_type)
    return avro_kind(avro_type) == 'null'


def custom_properties(avro_schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Returns the non-reserved attributes of an Avro schema object in
    declaration order.
    """
    return {key: value for key, value in avro_schema.items()
            if key not in AVRO_RESERVED_ATTRIBUTES and key not in AVRO_INTERNAL_PROPS}


def require_attribute(avro_schema: Dict[str, Any], attribute: str, context: str = '') -> Any:
    """
    Returns a mandatory attribute of an Avro schema object.

    Raises:
        SchemaParseError: If the attribute is missing.
    """
    if attribute not in avro_schema:
        kind = avro_schema.get('type', 'schema')
        raise SchemaParseError(f"Avro {kind if isinstance(kind, str) else 'schema'} is missing the '{attribute}' attribute",
                               context=context or avro_schema.get('name'))
    return avro_schema[attribute]
