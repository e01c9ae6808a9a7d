import orjson
import pytest

from data_explorer.config import ExplorerSettings, ExportFormat, SettingsStore
from data_explorer.errors import FormatNotFoundError
from data_explorer.events import ExplorerEvents


@pytest.fixture()
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_bytes(
        orjson.dumps(
            {
                "database": "Juris-M",
                "port": 24119,
                "exportFormats": [
                    {
                        "name": "Note",
                        "templatePath": "templates/note.md",
                        "headerTemplatePath": "",
                        "outputPathTemplate": "notes/{{citekey}}.md",
                    }
                ],
                "unknownSetting": True,
            }
        )
    )
    return path


def test_load_reads_camel_case_settings(settings_file):
    store = SettingsStore.load(settings_file)
    settings = store.settings

    assert settings.database == "Juris-M"
    assert settings.connection.port == 24119
    assert settings.content_root == settings_file.parent
    export_format = settings.export_formats[0]
    assert export_format.template_path == "templates/note.md"
    assert export_format.header_template_path is None
    assert export_format.output_path_template == "notes/{{citekey}}.md"
    assert export_format.image_base_name_template == "image"


def test_relative_content_root_is_resolved_against_settings_dir(tmp_path):
    path = tmp_path / "settings.json"
    path.write_bytes(orjson.dumps({"contentRoot": "vault"}))

    assert SettingsStore.load(path).settings.content_root == tmp_path / "vault"


def test_save_writes_camel_case(settings_file):
    store = SettingsStore.load(settings_file)
    store.save()

    saved = orjson.loads(settings_file.read_bytes())
    assert saved["exportFormats"][0]["templatePath"] == "templates/note.md"
    assert "unknownSetting" not in saved


def test_save_without_path_fails():
    with pytest.raises(ValueError):
        SettingsStore().save()


def test_snake_case_names_are_accepted():
    export_format = ExportFormat(name="A", template_path="a.md", footer_template_path=" ")
    assert export_format.partial_template_paths() == {}

    export_format = ExportFormat.model_validate(
        {"name": "B", "annotationTemplatePath": "ann.md", "footerTemplatePath": "foot.md"}
    )
    assert export_format.partial_template_paths() == {"annotations": "ann.md", "footer": "foot.md"}


def test_update_publishes_settings_updated(store, router):
    seen = []
    router.subscribe(ExplorerEvents.SETTINGS_UPDATED, lambda ctx: seen.append(ctx.event))

    updated = store.update(port=1)

    assert updated.port == 1
    assert store.settings is updated
    assert seen == [ExplorerEvents.SETTINGS_UPDATED]
    assert [fmt.name for fmt in updated.export_formats] == ["Note", "With header", "Missing"]


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_format_at_out_of_range(store, index):
    with pytest.raises(FormatNotFoundError):
        store.format_at(index)
    with pytest.raises(IndexError):
        store.export_params(index)


def test_export_params_bundle_settings_and_connection(store):
    params = store.export_params(1)

    assert params.export_format.header_template_path == "templates/header.md"
    assert params.database.database == "Zotero"
    assert params.database.port == 23119
    assert params.settings is store.settings


def test_default_settings_are_empty():
    assert ExplorerSettings().export_formats == []
