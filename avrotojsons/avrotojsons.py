"""

Command line utility to convert Avro schemas to JSON Schema.

"""


import argparse
import sys

from avrotojsons import _version
from avrotojsons.converter import convert_avro_directory_to_json_schema, resolve_options, AvroToJsonSchemaConverter
from avrotojsons.options import PRESET_POJO_OPTIMIZED, PRESET_STRICT
from avrotojsons.schemaregistry import LATEST_VERSION, SchemaRegistryClient


def add_conversion_options(cmd_parser):
    """Add the preset and draft options shared by all commands."""
    cmd_parser.add_argument('--strict', action='store_true',
                            help='Use strict JSON Schema mode (no POJO optimizations).')
    cmd_parser.add_argument('--draft', type=str, default='draft-07',
                            help='JSON Schema draft version: draft-07 or draft-2020-12 (default: draft-07).')


def create_subparsers(subparsers):
    """Create subparsers for the commands."""
    a2j = subparsers.add_parser('a2j', help='Convert an Avro schema to JSON Schema.')
    a2j.add_argument('input', type=str, nargs='?', default=None,
                     help='The Avro schema file (.avsc). Reads stdin if neither a file nor a registry is given.')
    a2j.add_argument('--registry', type=str, default=None, help='Schema Registry URL.')
    a2j.add_argument('--subject', type=str, default=None, help='Schema subject name.')
    a2j.add_argument('--schema-version', type=str, default=LATEST_VERSION,
                     help='Schema version in the registry (default: latest).')
    a2j.add_argument('--out', type=str, default=None,
                     help='The output JSON Schema file. Prints to stdout if omitted.')
    add_conversion_options(a2j)

    a2j_dir = subparsers.add_parser('a2j-dir', help='Convert all Avro schemas in a directory to JSON Schema.')
    a2j_dir.add_argument('--src', type=str, required=True, help='Directory containing .avsc files.')
    a2j_dir.add_argument('--out', type=str, required=True, help='Output directory for the .json files.')
    add_conversion_options(a2j_dir)


def read_input(args) -> str:
    """Read the Avro schema text from a file, the registry or stdin."""
    input_path = getattr(args, 'input', None)
    registry = getattr(args, 'registry', None)
    if registry and input_path:
        raise ValueError('An input file and --registry cannot be combined.')
    if registry:
        if not getattr(args, 'subject', None):
            raise ValueError('--subject is required with --registry.')
        client = SchemaRegistryClient(registry)
        return client.fetch_schema(args.subject, getattr(args, 'schema_version', LATEST_VERSION))
    if input_path:
        with open(input_path, 'r', encoding='utf-8') as f:
            return f.read()
    return sys.stdin.read()


def main():
    """Main function for the command line utility."""
    parser = argparse.ArgumentParser(description='Convert Avro schemas to JSON Schema.')
    parser.add_argument('--version', action='store_true', help='Print the version of avrotojsons.')

    subparsers = parser.add_subparsers(dest='command')
    create_subparsers(subparsers)

    args = parser.parse_args()

    if 'version' in args and args.version:
        print(f'avrotojsons {_version.version}')
        return

    if args.command is None:
        parser.print_help()
        return

    try:
        preset = PRESET_STRICT if getattr(args, 'strict', False) else PRESET_POJO_OPTIMIZED
        options = resolve_options(preset, getattr(args, 'draft', None))

        if args.command == 'a2j-dir':
            count = convert_avro_directory_to_json_schema(args.src, args.out, preset, options.draft)
            print(f'Converted {count} Avro schema(s) from {args.src} to {args.out}')
            return

        avro_schema_text = read_input(args)
        json_schema = AvroToJsonSchemaConverter(options).convert(avro_schema_text)

        output_file_path = getattr(args, 'out', None)
        if output_file_path:
            with open(output_file_path, 'w', encoding='utf-8') as f:
                f.write(json_schema)
            source_name = getattr(args, 'input', None) or getattr(args, 'subject', None) or 'stdin'
            print(f'Successfully converted {source_name} to {output_file_path}')
        else:
            sys.stdout.write(json_schema + '\n')

    except Exception as e:
        print("Error: ", str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
