import unittest

from avrotojsons.logicaltypes import JAVA_TYPE_HINT_KEY, map_logical_type


class TestLogicalTypeMapping(unittest.TestCase):

    def test_mapping_table(self):
        expected = {
            'decimal': ({'type': 'number'}, 'java.math.BigDecimal'),
            'timestamp-millis': ({'type': 'integer', 'format': 'utc-millisec'}, 'java.time.Instant'),
            'timestamp-micros': ({'type': 'integer', 'format': 'utc-millisec'}, 'java.time.Instant'),
            'date': ({'type': 'string', 'format': 'date'}, 'java.time.LocalDate'),
            'time-millis': ({'type': 'string', 'format': 'time'}, 'java.time.LocalTime'),
            'time-micros': ({'type': 'string', 'format': 'time'}, 'java.time.LocalTime'),
            'uuid': ({'type': 'string', 'format': 'uuid'}, 'java.util.UUID'),
            'duration': ({'type': 'string', 'format': 'duration'}, 'java.time.Duration'),
        }
        for tag, (json_schema, java_type) in expected.items():
            self.assertEqual(map_logical_type(tag), json_schema, tag)
            with_hint = dict(json_schema)
            with_hint[JAVA_TYPE_HINT_KEY] = java_type
            self.assertEqual(map_logical_type(tag, java_type_hints=True), with_hint, tag)

    def test_key_order(self):
        self.assertEqual(list(map_logical_type('uuid', True).keys()), ['type', 'format', 'javaType'])

    def test_unknown_tags(self):
        for tag in ['local-timestamp-millis', 'big-decimal', '', 'UUID']:
            self.assertIsNone(map_logical_type(tag, True))

    def test_results_are_independent(self):
        first = map_logical_type('date')
        first['format'] = 'changed'
        self.assertEqual(map_logical_type('date')['format'], 'date')
