import pytest

from gibman.errors import (
    ConfiguredPathMissingError,
    EngineConfigNotAbsoluteError,
    MissingFileError,
    NoIwadOrEngineSpecifiedError,
    NoMatchFoundError,
    PathsNotConfiguredError,
    PresetNotFoundError,
)
from gibman.models import UNSET, AbsolutePath, Configuration, Name, Preset
from gibman.resolver import resolve, resolve_engine, resolve_iwad, resolve_wads


@pytest.fixture
def iwad_dir(tmp_path, touch):
    touch(tmp_path / "iwads" / "DOOM.WAD")
    touch(tmp_path / "iwads" / "doom2.wad")
    return tmp_path / "iwads"


@pytest.fixture
def engine(tmp_path, touch):
    return touch(tmp_path / "bin" / "gzdoom")


class TestResolveIwad:

    def test_absolute_existing_path_is_returned_unchanged(self, iwad_dir):
        wad = str(iwad_dir / "doom2.wad")
        assert resolve_iwad(Configuration(), wad) == wad

    def test_absolute_missing_path_fails(self, tmp_path):
        with pytest.raises(MissingFileError):
            resolve_iwad(Configuration(paths=[str(tmp_path)]), str(tmp_path / "tnt.wad"))

    def test_table_entry_wins(self, tmp_path, touch, iwad_dir):
        configured = touch(tmp_path / "elsewhere" / "doom2.wad")
        config = Configuration(
            paths=[str(iwad_dir)],
            iwad_table={"doom2": AbsolutePath(configured)},
        )
        assert resolve_iwad(config, "doom2") == configured

    def test_absolute_directory_is_not_a_file(self, tmp_path):
        (tmp_path / "DOOM2.WAD").mkdir()
        with pytest.raises(MissingFileError):
            resolve_iwad(Configuration(paths=[str(tmp_path)]), str(tmp_path / "DOOM2.WAD"))

    def test_table_entry_pointing_to_directory_is_broken(self, tmp_path, iwad_dir):
        (tmp_path / "doom2.wad").mkdir()
        config = Configuration(
            paths=[str(iwad_dir)],
            iwad_table={"doom2": AbsolutePath(str(tmp_path / "doom2.wad"))},
        )
        with pytest.raises(ConfiguredPathMissingError):
            resolve_iwad(config, "doom2")

    def test_broken_table_entry_never_falls_back_to_search(self, tmp_path, iwad_dir):
        config = Configuration(
            paths=[str(iwad_dir)],
            iwad_table={"doom2": AbsolutePath(str(tmp_path / "gone" / "doom2.wad"))},
        )
        with pytest.raises(ConfiguredPathMissingError):
            resolve_iwad(config, "doom2")

    def test_unconfigured_name_is_searched(self, iwad_dir):
        config = Configuration(paths=[str(iwad_dir)], iwad_table={"doom": UNSET})
        assert resolve_iwad(config, "doom") == str(iwad_dir / "DOOM.WAD")

    def test_relative_table_value_is_the_search_basename(self, iwad_dir):
        config = Configuration(paths=[str(iwad_dir)], iwad_table={"d2": Name("DOOM2")})
        assert resolve_iwad(config, "d2") == str(iwad_dir / "doom2.wad")

    def test_paths_not_configured(self):
        with pytest.raises(PathsNotConfiguredError) as exc:
            resolve_iwad(Configuration(), "doom")
        assert "iwad_paths" in str(exc.value)

    def test_no_match(self, iwad_dir):
        with pytest.raises(NoMatchFoundError) as exc:
            resolve_iwad(Configuration(paths=[str(iwad_dir)]), "heretic")
        assert exc.value.kind == "NoMatchFound"

    def test_iwad_search_only_accepts_wad_extension(self, tmp_path, touch):
        touch(tmp_path / "freedoom.pk3")
        with pytest.raises(NoMatchFoundError):
            resolve_iwad(Configuration(paths=[str(tmp_path)]), "freedoom")

    def test_recursive_flag_is_honoured(self, tmp_path, touch):
        nested = touch(tmp_path / "id" / "ultimate" / "doom.wad")
        flat = Configuration(paths=[str(tmp_path)])
        deep = Configuration(paths=[str(tmp_path)], recursive_search=True)

        with pytest.raises(NoMatchFoundError):
            resolve_iwad(flat, "doom")
        assert resolve_iwad(deep, "doom") == nested

    def test_idempotent(self, iwad_dir):
        config = Configuration(paths=[str(iwad_dir)])
        assert resolve_iwad(config, "doom2") == resolve_iwad(config, "doom2")


class TestResolveEngine:

    def test_absolute_path(self, engine):
        resolved = resolve_engine(Configuration(), engine)
        assert resolved.path == engine

    def test_absolute_path_missing(self, tmp_path):
        with pytest.raises(MissingFileError):
            resolve_engine(Configuration(), str(tmp_path / "nope"))

    def test_configured_path(self, engine):
        config = Configuration(engine_table={"gzdoom": AbsolutePath(engine)})
        resolved = resolve_engine(config, "gzdoom")
        assert resolved.name == "gzdoom"
        assert resolved.path == engine

    def test_absolute_directory_is_not_an_engine(self, tmp_path):
        (tmp_path / "gzdoom").mkdir()
        with pytest.raises(MissingFileError):
            resolve_engine(Configuration(), str(tmp_path / "gzdoom"))

    def test_configured_path_missing(self, tmp_path):
        config = Configuration(engine_table={"boom": AbsolutePath(str(tmp_path / "boom"))})
        with pytest.raises(ConfiguredPathMissingError):
            resolve_engine(config, "boom")

    def test_relative_engine_entry_is_rejected(self):
        config = Configuration(engine_table={"gzdoom": Name("gzdoom-bin")})
        with pytest.raises(EngineConfigNotAbsoluteError) as exc:
            resolve_engine(config, "gzdoom")
        assert "[engine]" in str(exc.value)

    @pytest.mark.parametrize("table", [{}, {"gzdoom": UNSET}])
    def test_unconfigured_engine_is_passed_through(self, table):
        resolved = resolve_engine(Configuration(engine_table=table), "gzdoom")
        assert resolved.name == "gzdoom"
        assert resolved.path is None


class TestResolveWads:

    def test_order_is_preserved(self, tmp_path, touch):
        w1 = touch(tmp_path / "wads" / "w1.wad")
        w2 = touch(tmp_path / "wads" / "w2.pk3")
        config = Configuration(paths=[str(tmp_path / "wads")])
        preset = Preset(name="p", wads=(Name("w2"), Name("w1")))

        assert resolve_wads(config, preset) == (w2, w1)

    def test_mixed_entries(self, tmp_path, touch):
        absolute = touch(tmp_path / "anywhere" / "example.wad")
        listed = touch(tmp_path / "listed" / "foobar.wad")
        searched = touch(tmp_path / "wads" / "Sigil_v1_21.zip")
        config = Configuration(
            wad_paths=[str(tmp_path / "wads")],
            wad_table={"wad1": AbsolutePath(listed), "sigil": Name("sigil_v1_21")},
        )
        preset = Preset(
            name="p",
            wads=(Name("wad1"), Name("sigil"), AbsolutePath(absolute)),
        )

        assert resolve_wads(config, preset) == (listed, searched, absolute)

    def test_no_wads(self):
        assert resolve_wads(Configuration(), Preset(name="p")) == ()

    def test_wad_paths_fall_back_to_iwad_paths(self, tmp_path, touch):
        wad = touch(tmp_path / "shared" / "btsx_e1.wad")
        config = Configuration(paths=[str(tmp_path / "shared")])
        preset = Preset(name="p", wads=(Name("btsx_e1"),))
        assert resolve_wads(config, preset) == (wad,)

    def test_wad_recursive_override(self, tmp_path, touch):
        wad = touch(tmp_path / "wads" / "megawads" / "av.wad")
        config = Configuration(wad_paths=[str(tmp_path / "wads")], wad_recursive_search=True)
        assert resolve_wads(config, Preset(name="p", wads=(Name("av"),))) == (wad,)

    def test_missing_wad_fails_with_field_name(self, tmp_path):
        (tmp_path / "wads").mkdir()
        config = Configuration(wad_paths=[str(tmp_path / "wads")])
        with pytest.raises(NoMatchFoundError) as exc:
            resolve_wads(config, Preset(name="p", wads=(Name("nope"),)))
        assert "wad_paths" in str(exc.value)

    def test_broken_wad_entry(self, tmp_path):
        config = Configuration(wad_table={"wad1": AbsolutePath(str(tmp_path / "gone.wad"))})
        with pytest.raises(ConfiguredPathMissingError):
            resolve_wads(config, Preset(name="p", wads=(Name("wad1"),)))


class TestResolve:

    @pytest.fixture
    def config(self, tmp_path, touch, iwad_dir, engine):
        touch(tmp_path / "wads" / "w1.wad")
        touch(tmp_path / "wads" / "w2.wad")
        return Configuration(
            paths=[str(iwad_dir)],
            wad_paths=[str(tmp_path / "wads")],
            default_iwad=Name("doom"),
            default_engine=Name("gzdoom"),
            engine_table={"gzdoom": AbsolutePath(engine), "zdoom": UNSET},
            presets={
                "full": Preset(name="full", iwad=Name("doom2"), engine=Name("zdoom"),
                               note="hi", wads=(Name("w2"), Name("w1"))),
                "defaults": Preset(name="defaults"),
            },
        )

    def test_defaults_without_preset(self, config, iwad_dir, engine):
        resolution = resolve(config)
        assert resolution.iwad == str(iwad_dir / "DOOM.WAD")
        assert resolution.engine.path == engine
        assert resolution.wads == ()
        assert resolution.preset is None

    def test_preset_values(self, config, tmp_path, iwad_dir):
        resolution = resolve(config, "full")
        assert resolution.iwad == str(iwad_dir / "doom2.wad")
        assert resolution.engine.name == "zdoom"
        assert resolution.engine.path is None
        assert resolution.wads == (str(tmp_path / "wads" / "w2.wad"),
                                   str(tmp_path / "wads" / "w1.wad"))

    def test_preset_falls_back_to_defaults(self, config, iwad_dir, engine):
        resolution = resolve(config, "defaults")
        assert resolution.iwad == str(iwad_dir / "DOOM.WAD")
        assert resolution.engine.path == engine

    def test_unknown_preset(self, config):
        with pytest.raises(PresetNotFoundError):
            resolve(config, "nope")

    def test_no_iwad_anywhere(self, engine):
        config = Configuration(
            default_engine=AbsolutePath(engine),
            presets={"p": Preset(name="p")},
        )
        with pytest.raises(NoIwadOrEngineSpecifiedError) as exc:
            resolve(config, "p")
        assert exc.value.what == "iwad"

    def test_no_engine_anywhere(self, iwad_dir):
        config = Configuration(paths=[str(iwad_dir)], default_iwad=Name("doom"))
        with pytest.raises(NoIwadOrEngineSpecifiedError) as exc:
            resolve(config)
        assert exc.value.what == "engine"
