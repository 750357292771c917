import unittest

from json_schema_to_jvm.pipeline import CodeGeneratorConfig, ConfigurationError, OutputConfig, OutputMode


def complete_config(**kwargs):
    return CodeGeneratorConfig(
        search_root_dir="schemas",
        output_dir="out",
        schema_id_root_uri="https://my-domain.com/my-api/schemas",
        root_package="com.example.model",
        **kwargs,
    )


class TestCodeGeneratorConfig(unittest.TestCase):
    def test_defaults(self):
        config = CodeGeneratorConfig()
        self.assertEqual(config.pojo_name_suffix, "Dto")
        self.assertEqual(config.language, "java")
        self.assertTrue(config.pojos_as_records)
        self.assertFalse(config.add_open_api_schema_annotations)
        self.assertTrue(config.add_json_property_annotations)
        self.assertTrue(config.add_jakarta_bean_validation_annotations)
        self.assertEqual(config.output.mode, OutputMode.FORCE)

    def test_dict_round_trip(self):
        config = complete_config(
            language="kotlin",
            indent_with_tab=True,
            output=OutputConfig(OutputMode.ERROR_IF_EXISTS, False),
        )
        restored = CodeGeneratorConfig.from_dict(config.to_dict())
        self.assertEqual(restored, config)

    def test_from_dict_ignores_unknown_keys(self):
        config = CodeGeneratorConfig.from_dict({"root_package": "a.b", "colour": "blue", "output": {"mode": "error"}})
        self.assertEqual(config.root_package, "a.b")
        self.assertFalse(hasattr(config, "colour"))
        self.assertEqual(config.output.mode, OutputMode.ERROR_IF_EXISTS)
        self.assertTrue(config.output.atomic_write)

    def test_validate(self):
        complete_config().validate()

        with self.assertRaisesRegex(ConfigurationError, "root_package"):
            complete_config(root_package="").validate()

        with self.assertRaisesRegex(ConfigurationError, "Language not supported"):
            complete_config(language="scala").validate()

        with self.assertRaises(ConfigurationError):
            complete_config(indent_size=-1).validate()

    def test_locations(self):
        config = complete_config()
        self.assertEqual(config.get_model_output_dir(), "out")
        self.assertEqual(config.get_model_output_dir("common"), "out/common")
        self.assertEqual(config.get_model_package(), "com.example.model")
        self.assertEqual(config.get_model_package("common.v1"), "com.example.model.common.v1")

    def test_dialect_helpers(self):
        config = complete_config(indent_size=2)
        self.assertEqual(config.get_indent(), "  ")
        config.language = "kotlin"
        config.indent_with_tab = True
        self.assertTrue(config.use_kotlin_syntax)
        self.assertEqual(config.get_indent(), "\t")


if __name__ == "__main__":
    unittest.main()
