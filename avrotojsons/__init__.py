import importlib

mod = "avrotojsons"
class LazyLoader:
    """
    Lazy loader for the avrotojsons functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, attr_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, attr_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the public names and their corresponding module paths
_mappings = {
    "AvroToJsonSchemaConverter": (f"{mod}.converter", "AvroToJsonSchemaConverter"),
    "ConverterOptions": (f"{mod}.options", "ConverterOptions"),
    "JsonSchemaDraft": (f"{mod}.options", "JsonSchemaDraft"),
    "SchemaParseError": (f"{mod}.errors", "SchemaParseError"),
    "ConversionError": (f"{mod}.errors", "ConversionError"),
    "SchemaRegistryClient": (f"{mod}.schemaregistry", "SchemaRegistryClient"),
    "SchemaRegistryError": (f"{mod}.schemaregistry", "SchemaRegistryError"),
    "convert_avro_to_json_schema": (f"{mod}.converter", "convert_avro_to_json_schema"),
    "convert_avro_schema_to_json_schema": (f"{mod}.converter", "convert_avro_schema_to_json_schema"),
    "convert_avro_directory_to_json_schema": (f"{mod}.converter", "convert_avro_directory_to_json_schema"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
