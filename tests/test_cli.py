import io
import json

import pytest

from conftest import build_transport
from jobs import snapshot
from jobs.__main__ import main
from pipelines.fallback import fallback_view_model
from pipelines.reconcile import Reconciler


def test_list_sources(capsys, monkeypatch):
    monkeypatch.setenv("DATA_GOV_IN_BASE_URL", "https://data.example.test/resource")

    assert main(["list-sources"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("survey_preferences: National Sample Survey (NSS)")
    assert "https://data.example.test/resource/9ef84268-d583-465a-b399-0a5d0b5ace15" in lines[0]
    assert "Career preferences reported by students" in lines[0]


def test_list_sources_filtered(capsys):
    assert main(["list-sources", "--sources", "school_infrastructure, platform_usage"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert [line.split(":", 1)[0] for line in lines] == ["school_infrastructure", "platform_usage"]
    assert "School counts and career counseling availability" in lines[0]


def test_list_sources_rejects_unknown_keys():
    with pytest.raises(SystemExit, match="Unknown source keys: census"):
        main(["list-sources", "--sources", "census,platform_usage"])


def test_snapshot_prints_fallback_when_sources_are_down(monkeypatch):
    original = Reconciler.from_settings

    def offline(settings=None, *, transport=None):
        return original(settings, transport=build_transport({}))

    monkeypatch.setattr(Reconciler, "from_settings", staticmethod(offline))
    out = io.StringIO()

    assert snapshot.main(pretty=True, out=out) == 0

    payload = json.loads(out.getvalue())
    assert payload["isLoading"] is False
    assert payload["warningMessage"] is None
    assert payload["viewModel"] == fallback_view_model().model_dump(mode="json", by_alias=True)
