"""
Converts Avro schemas to JSON Schema documents.
"""

import copy
import json
import logging
import os
from typing import Any, Dict, List, Optional, Set

from avrotojsons.common import (JSON_PRIMITIVE_NAMES, PRIMITIVE_TYPES, AvroSchema, avro_kind,
                                custom_properties, fullname, is_nullable, local_name, namespace_of,
                                parse_avro_schema_text, require_attribute)
from avrotojsons.errors import ConversionError, SchemaParseError
from avrotojsons.logicaltypes import map_logical_type
from avrotojsons.options import ConverterOptions, JsonSchemaDraft

logger = logging.getLogger(__name__)

RECORD_TYPES = ('record', 'error')


class ConversionContext:
    """
    State of a single conversion: the records entered so far and the
    definitions collected for them. Never shared between conversions.
    """

    def __init__(self) -> None:
        self.seen_records: Set[str] = set()
        self.definitions: Dict[str, Dict[str, Any]] = {}
        # full name -> Avro definition, for resolving references to enums and fixed types
        self.named_types: Dict[str, Dict[str, Any]] = {}


class AvroToJsonSchemaConverter:
    """
    Converts an Avro schema into a JSON Schema document.

    The converter only holds its options; each call to `convert` or
    `convert_schema` works on a fresh `ConversionContext`, so an instance
    can be shared between threads.
    """

    def __init__(self, options: Optional[ConverterOptions] = None) -> None:
        self.options = options if options is not None else ConverterOptions.pojo_optimized()

    def convert(self, avro_schema_text: str) -> str:
        """
        Convert Avro schema JSON text into pretty-printed JSON Schema text.

        Raises:
            SchemaParseError: If the text is not a walkable Avro schema.
            ConversionError: On an internal invariant violation.
        """
        avro_schema = parse_avro_schema_text(avro_schema_text)
        return json.dumps(self.convert_schema(avro_schema), indent=4)

    def convert_schema(self, avro_schema: AvroSchema) -> Dict[str, Any]:
        """
        Convert a parsed Avro schema into a JSON Schema document.
        """
        draft = self.options.draft
        json_schema: Dict[str, Any] = {'$schema': draft.schema_url}
        context = ConversionContext()
        root = self.convert_node(avro_schema, context)
        if context.definitions:
            json_schema[draft.definitions_keyword] = context.definitions
        json_schema.update(root)
        return json_schema

    def convert_node(self, avro_schema: AvroSchema, context: ConversionContext, namespace: str = '') -> Dict[str, Any]:
        """
        Convert one Avro schema node.

        Args:
            avro_schema: The node: a type name, a union list or a schema object.
            context: The state of the running conversion.
            namespace: The namespace of the enclosing named type.
        """
        if isinstance(avro_schema, list):
            json_schema: Dict[str, Any] = {}
            self.convert_union(json_schema, avro_schema, context, namespace)
            return json_schema
        if isinstance(avro_schema, str):
            return self.convert_type_name(avro_schema, context, namespace)
        if not isinstance(avro_schema, dict):
            raise SchemaParseError(f"Avro schema contains unexpected construct {avro_schema!r}")

        avro_type = require_attribute(avro_schema, 'type')
        if isinstance(avro_type, (dict, list)):
            return self.convert_node(avro_type, context, namespace)
        if not isinstance(avro_type, str):
            raise SchemaParseError(f"Avro schema has an invalid 'type' attribute {avro_type!r}")

        qualified_name = ''
        if avro_type in RECORD_TYPES or avro_type in ('enum', 'fixed'):
            if not isinstance(require_attribute(avro_schema, 'name'), str):
                raise SchemaParseError(f"Avro {avro_type} name must be a string, not {avro_schema['name']!r}")
            qualified_name = fullname(avro_schema, namespace)
        if avro_type in RECORD_TYPES:
            if qualified_name in context.seen_records:
                return self.convert_reference(qualified_name)
            context.seen_records.add(qualified_name)
            context.named_types[qualified_name] = avro_schema
        elif qualified_name:
            context.named_types[qualified_name] = avro_schema

        json_schema = {}
        logical_type_claimed = False
        logical_type = avro_schema.get('logicalType')
        if isinstance(logical_type, str):
            mapped = map_logical_type(logical_type, self.options.java_type_hints)
            if mapped is not None:
                json_schema.update(mapped)
                logical_type_claimed = True

        if avro_type in RECORD_TYPES:
            self.convert_record(json_schema, avro_schema, qualified_name, context)
        elif avro_type == 'array':
            if 'type' not in json_schema:
                json_schema['type'] = 'array'
            json_schema['items'] = self.convert_node(require_attribute(avro_schema, 'items'), context, namespace)
        elif avro_type == 'map':
            if 'type' not in json_schema:
                json_schema['type'] = 'object'
            json_schema['additionalProperties'] = self.convert_node(
                require_attribute(avro_schema, 'values'), context, namespace)
        elif avro_type == 'enum':
            if 'type' not in json_schema:
                json_schema['type'] = 'string'
            symbols = require_attribute(avro_schema, 'symbols')
            if not isinstance(symbols, list) or not all(isinstance(s, str) for s in symbols):
                raise SchemaParseError("Enum 'symbols' must be an array of strings", context=qualified_name)
            json_schema['enum'] = list(symbols)
        elif avro_type in PRIMITIVE_TYPES or avro_type == 'fixed':
            self.convert_primitive(json_schema, avro_type, logical_type_claimed)
        else:
            # annotated reference to a named type, e.g. {"type": "com.example.Address"}
            for key, value in self.convert_type_name(avro_type, context, namespace).items():
                if key not in json_schema:
                    json_schema[key] = value

        if 'doc' in avro_schema:
            json_schema['description'] = avro_schema['doc']
        json_schema.update(custom_properties(avro_schema))

        if avro_type in RECORD_TYPES:
            context.definitions[qualified_name] = copy.deepcopy(json_schema)
        return json_schema

    def convert_record(self, json_schema: Dict[str, Any], avro_schema: Dict[str, Any],
                       qualified_name: str, context: ConversionContext) -> None:
        """
        Fill in the object schema of an Avro record: title, properties,
        required list and the additionalProperties switch.
        """
        namespace = namespace_of(qualified_name)
        if 'type' not in json_schema:
            json_schema['type'] = 'object'
        json_schema['title'] = local_name(qualified_name)
        properties: Dict[str, Any] = {}
        required: List[str] = []
        json_schema['properties'] = properties
        json_schema['required'] = required

        fields = require_attribute(avro_schema, 'fields')
        if not isinstance(fields, list):
            raise SchemaParseError("Record 'fields' must be an array", context=qualified_name)
        for field in fields:
            if not isinstance(field, dict):
                raise SchemaParseError(f"Record field must be an object, not {field!r}", context=qualified_name)
            field_name = require_attribute(field, 'name', context=qualified_name)
            field_type = require_attribute(field, 'type', context=f"{qualified_name}.{field_name}")
            prop = self.convert_node(field_type, context, namespace)
            if not is_nullable(field_type):
                required.append(field_name)
            if 'doc' in field:
                prop['description'] = field['doc']
            if 'default' in field:
                prop.pop('default', None)
                prop['default'] = field['default']
            properties[field_name] = prop

        if self.options.omit_empty_required and not required:
            del json_schema['required']
        if self.options.additional_properties_false:
            json_schema['additionalProperties'] = False

    def convert_union(self, json_schema: Dict[str, Any], types: List[AvroSchema],
                      context: ConversionContext, namespace: str) -> None:
        """
        Write the JSON Schema form of an Avro union into json_schema.

        A union of null and a single other type is flattened into that type,
        or becomes a ["null", X] type array or a null/X oneOf in strict mode.
        Every other union becomes a oneOf over all members in order.
        """
        non_null_types = [t for t in types if avro_kind(t) != 'null']
        has_null = len(types) != len(non_null_types)

        if has_null and len(non_null_types) == 1:
            inner = non_null_types[0]
            if self.options.flatten_nullable_unions:
                json_schema.update(self.convert_node(inner, context, namespace))
                return
            inner_kind = self.resolve_kind(inner, context, namespace)
            if inner_kind in JSON_PRIMITIVE_NAMES:
                mapped = None
                if isinstance(inner, dict) and isinstance(inner.get('logicalType'), str):
                    mapped = map_logical_type(inner['logicalType'], self.options.java_type_hints)
                # the logical type replaces the plain primitive mapping, e.g. decimal bytes gives ["null", "number"]
                if mapped is not None:
                    json_schema['type'] = ['null', mapped.pop('type')]
                    json_schema.update(mapped)
                else:
                    json_schema['type'] = ['null', self.json_primitive_name(inner_kind)]
                return
            json_schema['oneOf'] = [{'type': 'null'}, self.convert_node(inner, context, namespace)]
            return

        json_schema['oneOf'] = [self.convert_node(t, context, namespace) for t in types]

    def convert_primitive(self, json_schema: Dict[str, Any], avro_type: str, logical_type_claimed: bool) -> None:
        if avro_type in ('bytes', 'fixed'):
            if not logical_type_claimed:
                json_schema['type'] = 'string'
                json_schema['contentEncoding'] = 'base64'
        elif 'type' not in json_schema:
            json_schema['type'] = self.json_primitive_name(avro_type)

    def convert_type_name(self, name: str, context: ConversionContext, namespace: str) -> Dict[str, Any]:
        """
        Convert a primitive type name or a reference to a named type.
        """
        if name in PRIMITIVE_TYPES:
            json_schema: Dict[str, Any] = {}
            self.convert_primitive(json_schema, name, False)
            return json_schema
        qualified_name = self.resolve_name(name, context, namespace)
        if qualified_name in context.seen_records:
            return self.convert_reference(qualified_name)
        return self.convert_node(context.named_types[qualified_name], context, namespace_of(qualified_name))

    def convert_reference(self, qualified_name: str) -> Dict[str, Any]:
        logger.debug("Referencing record '%s' via $ref", qualified_name)
        return {'$ref': self.options.draft.ref_prefix + qualified_name}

    def resolve_name(self, name: str, context: ConversionContext, namespace: str) -> str:
        """
        Resolve a type name to the full name of a previously defined type.
        Unqualified names are looked up in the enclosing namespace first,
        then in the null namespace.

        Raises:
            SchemaParseError: If no such type has been defined.
        """
        candidates = [fullname(name, namespace)]
        if '.' not in name and namespace:
            candidates.append(name)
        for candidate in candidates:
            if candidate in context.named_types:
                return candidate
        raise SchemaParseError(f"Undefined Avro type name '{name}'",
                               context=f"namespace '{namespace}'" if namespace else None)

    def resolve_kind(self, avro_schema: AvroSchema, context: ConversionContext, namespace: str) -> str:
        """Returns the kind of a node, following references to named types."""
        kind = avro_kind(avro_schema)
        if kind in PRIMITIVE_TYPES or kind in ('union', 'array', 'map', 'enum', 'fixed') or kind in RECORD_TYPES:
            return kind
        return avro_kind(context.named_types[self.resolve_name(kind, context, namespace)])

    @staticmethod
    def json_primitive_name(avro_type: str) -> str:
        """
        Map a primitive Avro kind to its JSON Schema type name.

        Raises:
            ConversionError: If the kind has no JSON primitive counterpart.
        """
        if avro_type not in JSON_PRIMITIVE_NAMES:
            raise ConversionError(f"Not a primitive type: {avro_type}")
        return JSON_PRIMITIVE_NAMES[avro_type]


def resolve_options(preset: Optional[str] = None, draft: Optional[str | JsonSchemaDraft] = None) -> ConverterOptions:
    """
    Build converter options from a preset name and a draft identifier.
    """
    options = ConverterOptions.from_preset(preset)
    if draft is not None:
        if not isinstance(draft, JsonSchemaDraft):
            draft = JsonSchemaDraft.from_string(draft)
        options = options.with_draft(draft)
    return options


def convert_avro_schema_to_json_schema(avro_schema_text: str, preset: Optional[str] = None,
                                       draft: Optional[str | JsonSchemaDraft] = None) -> str:
    """
    Convert Avro schema text to JSON Schema text.

    :param avro_schema_text: The Avro schema as JSON text.
    :param preset: 'pojo-optimized' (default) or 'strict'.
    :param draft: 'draft-07' (default) or 'draft-2020-12'.
    """
    converter = AvroToJsonSchemaConverter(resolve_options(preset, draft))
    return converter.convert(avro_schema_text)


def convert_avro_to_json_schema(avro_schema_file: str, json_schema_file: Optional[str] = None,
                                preset: Optional[str] = None,
                                draft: Optional[str | JsonSchemaDraft] = None) -> str:
    """
    Convert an Avro schema file to a JSON schema file.

    :param avro_schema_file: The path to the input Avro schema file.
    :param json_schema_file: The path to the output JSON schema file. Nothing is written if omitted.
    :param preset: 'pojo-optimized' (default) or 'strict'.
    :param draft: 'draft-07' (default) or 'draft-2020-12'.
    :return: The JSON schema text.
    """
    with open(avro_schema_file, 'r', encoding='utf-8') as file:
        avro_schema_text = file.read()

    json_schema = convert_avro_schema_to_json_schema(avro_schema_text, preset, draft)

    if json_schema_file:
        output_dir = os.path.dirname(json_schema_file)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(json_schema_file, 'w', encoding='utf-8') as file:
            file.write(json_schema)
    return json_schema


def convert_avro_directory_to_json_schema(source_dir: str, output_dir: str, preset: Optional[str] = None,
                                          draft: Optional[str | JsonSchemaDraft] = None) -> int:
    """
    Convert every .avsc file below source_dir into a .json file below
    output_dir, keeping the relative directory structure.

    :return: The number of converted files.
    """
    if not os.path.isdir(source_dir):
        logger.info("Source directory does not exist, skipping: %s", source_dir)
        return 0

    converter = AvroToJsonSchemaConverter(resolve_options(preset, draft))
    count = 0
    for root, dirs, files in os.walk(source_dir):
        dirs.sort()
        for file_name in sorted(files):
            if not file_name.endswith('.avsc'):
                continue
            avsc_path = os.path.join(root, file_name)
            relative_path = os.path.relpath(avsc_path, source_dir)
            json_relative_path = relative_path[:-len('.avsc')] + '.json'
            json_path = os.path.join(output_dir, json_relative_path)

            with open(avsc_path, 'r', encoding='utf-8') as file:
                json_schema = converter.convert(file.read())
            os.makedirs(os.path.dirname(json_path), exist_ok=True)
            with open(json_path, 'w', encoding='utf-8') as file:
                file.write(json_schema)
            logger.info("Converted %s -> %s", relative_path, json_relative_path)
            count += 1

    if count == 0:
        logger.info("No .avsc files found in %s", source_dir)
    else:
        logger.info("Converted %d Avro schema(s) to JSON Schema", count)
    return count
