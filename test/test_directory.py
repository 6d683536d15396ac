import json
import os
import shutil
import tempfile
import unittest

from avrotojsons.converter import convert_avro_directory_to_json_schema, convert_avro_schema_to_json_schema

USER_SCHEMA = '{"type": "record", "name": "User", "namespace": "com.example", "fields": [{"name": "id", "type": "int"}]}'
NODE_SCHEMA = '{"type": "record", "name": "Node", "fields": [{"name": "next", "type": ["null", "Node"]}]}'


class TestDirectoryConversion(unittest.TestCase):

    def setUp(self):
        self.source_dir = tempfile.mkdtemp()
        self.output_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.source_dir)
        shutil.rmtree(self.output_dir)

    def write_source(self, relative_path, text):
        full_path = os.path.join(self.source_dir, relative_path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, 'w', encoding='utf-8') as f:
            f.write(text)

    def read_output(self, relative_path):
        with open(os.path.join(self.output_dir, relative_path), 'r', encoding='utf-8') as f:
            return json.load(f)

    def test_converts_tree_and_keeps_structure(self):
        self.write_source('user.avsc', USER_SCHEMA)
        self.write_source(os.path.join('nested', 'deeper', 'node.avsc'), NODE_SCHEMA)
        self.write_source('notes.txt', 'not a schema')

        count = convert_avro_directory_to_json_schema(self.source_dir, self.output_dir)

        self.assertEqual(count, 2)
        self.assertEqual(self.read_output('user.json')['title'], 'User')
        node = self.read_output(os.path.join('nested', 'deeper', 'node.json'))
        self.assertEqual(node['properties']['next']['$ref'], '#/definitions/Node')
        self.assertFalse(os.path.exists(os.path.join(self.output_dir, 'notes.json')))

    def test_preset_and_draft(self):
        self.write_source('node.avsc', NODE_SCHEMA)
        convert_avro_directory_to_json_schema(self.source_dir, self.output_dir, preset='strict',
                                              draft='draft-2020-12')
        node = self.read_output('node.json')
        self.assertEqual(node['properties']['next']['oneOf'], [{'type': 'null'}, {'$ref': '#/$defs/Node'}])
        self.assertEqual(node['required'], [])

    def test_missing_source_directory(self):
        missing = os.path.join(self.source_dir, 'does-not-exist')
        with self.assertLogs('avrotojsons.converter', level='INFO') as logs:
            self.assertEqual(convert_avro_directory_to_json_schema(missing, self.output_dir), 0)
        self.assertIn('does not exist', logs.output[0])

    def test_empty_source_directory(self):
        self.assertEqual(convert_avro_directory_to_json_schema(self.source_dir, self.output_dir), 0)


class TestTextConversion(unittest.TestCase):

    def test_text_in_text_out(self):
        json_schema = json.loads(convert_avro_schema_to_json_schema(USER_SCHEMA, preset='strict'))
        self.assertEqual(json_schema['definitions']['com.example.User']['title'], 'User')
        self.assertNotIn('additionalProperties', json_schema)

    def test_unknown_preset(self):
        with self.assertRaises(ValueError):
            convert_avro_schema_to_json_schema(USER_SCHEMA, preset='relaxed')
