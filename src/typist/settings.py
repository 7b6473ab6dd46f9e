import dataclasses
import json
import pathlib

import cattrs

from .textinput.types import TextInputSettings

settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))


@dataclasses.dataclass(kw_only=True)
class Settings:
    text_input: TextInputSettings
    db_path: pathlib.Path

    def save(self, dest: pathlib.Path):
        raw = settings_converter.unstructure(self)
        with dest.open("w") as out:
            json.dump(raw, out, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as inp:
            raw = json.load(inp)
        return settings_converter.structure(raw, cls)

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "text_input": {
                    "stop_on_error": False,
                    "forgive_errors": True,
                    "space_skips_words": True,
                },
                "db_path": "test.db",
            },
            cls,
        )
