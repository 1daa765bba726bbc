import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from relpath.config import (
    ConfigLoader,
    deep_merge,
    get_config_value,
    read_yaml,
    set_config_value,
)
from relpath.os_info import OSInformation, resolve_os_information


class ConfigLoaderTests(unittest.TestCase):
    def test_precedence_and_sources(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            os.environ["RELPATH_HOME"] = temp_dir
            try:
                (Path(temp_dir) / "config.yaml").write_text(
                    "\n".join(
                        [
                            "os:",
                            "  convention: windows",
                            "logging:",
                            "  level: DEBUG",
                        ]
                    ),
                    encoding="utf-8",
                )

                loader = ConfigLoader()
                resolution = loader.resolve(cli_overrides={"logging": {"level": "ERROR"}})

                self.assertEqual(loader.data_dir, Path(temp_dir))
                self.assertEqual(resolution.effective["os"]["convention"], "windows")
                self.assertEqual(resolution.sources["os"]["convention"], "global")
                self.assertEqual(resolution.effective["logging"]["level"], "ERROR")
                self.assertEqual(resolution.sources["logging"]["level"], "cli")
                self.assertEqual(resolution.sources["logging"]["json_file"], "default")
                self.assertEqual(
                    resolution.annotated()["os"]["convention"],
                    {"value": "windows", "source": "global"},
                )
                self.assertEqual(resolve_os_information(resolution.effective), OSInformation.FAKE_WINDOWS)
            finally:
                os.environ.pop("RELPATH_HOME", None)

    def test_defaults_when_config_missing(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            resolution = ConfigLoader(data_dir=Path(temp_dir)).resolve()
            self.assertEqual(resolution.effective["os"]["convention"], "auto")
            self.assertEqual(resolution.sources["os"]["convention"], "default")

    def test_set_value_persists_to_global_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            loader = ConfigLoader(data_dir=Path(temp_dir) / "nested")
            loader.set_value("os.convention", "unix")
            self.assertEqual(read_yaml(loader.config_path), {"os": {"convention": "unix"}})
            self.assertEqual(loader.get_value("os.convention"), "unix")
            self.assertEqual(list(loader.config_path.parent.glob(".config.yaml.*")), [])

    def test_invalid_yaml_raises_runtime_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "config.yaml"
            path.write_text("os: [unclosed", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                ConfigLoader(data_dir=Path(temp_dir)).resolve()
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                read_yaml(path)

    def test_key_path_helpers(self) -> None:
        config = {"os": {"convention": "auto"}}
        set_config_value(config, "logging.level", "DEBUG")
        self.assertEqual(get_config_value(config, "logging.level"), "DEBUG")
        set_config_value(config, "os.convention.extra", 1)
        self.assertEqual(config["os"]["convention"], {"extra": 1})
        with self.assertRaises(KeyError):
            get_config_value(config, "missing.key")

    def test_deep_merge_does_not_mutate_base(self) -> None:
        base = {"os": {"convention": "auto"}, "logging": {"level": "INFO"}}
        merged = deep_merge(base, {"os": {"convention": "unix"}})
        self.assertEqual(merged["os"]["convention"], "unix")
        self.assertEqual(merged["logging"]["level"], "INFO")
        self.assertEqual(base["os"]["convention"], "auto")


if __name__ == "__main__":
    unittest.main()
