import pathlib

from typist.settings import Settings
from typist.textinput.types import TextInputSettings


def test_for_test():
    settings = Settings.for_test()
    assert settings.text_input == TextInputSettings(forgive_errors=True, space_skips_words=True)
    assert settings.db_path == pathlib.Path("test.db")


def test_save_and_load(tmp_path: pathlib.Path):
    settings = Settings(text_input=TextInputSettings(stop_on_error=True), db_path=tmp_path / "results.db")
    settings_path = tmp_path / "settings.json"
    settings.save(settings_path)
    assert Settings.load(settings_path) == settings


def test_load_defaults(tmp_path: pathlib.Path):
    settings_path = tmp_path / "settings.json"
    settings_path.write_text('{"text_input": {}, "db_path": "results.db"}')
    settings = Settings.load(settings_path)
    assert settings.text_input == TextInputSettings()
    assert not settings.text_input.forgive_errors
