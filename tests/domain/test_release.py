"""Tests for Release entity."""

import pytest
from keel.domain.entities.release import Release, StatusCode, Chart


class TestRelease:
    def test_version_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            Release(name="app", version=0, namespace="default", chart=Chart("app", "1.0"))

    def test_defaults(self):
        release = Release(name="app", version=1, namespace="default", chart=Chart("app", "1.0"))
        assert release.status == StatusCode.UNKNOWN
        assert release.hooks == ()
        assert release.info.description == ""

    def test_supersede_returns_new_instance(self, make_release):
        release = make_release(status=StatusCode.DEPLOYED)
        superseded = release.supersede()
        assert superseded.status == StatusCode.SUPERSEDED
        assert release.status == StatusCode.DEPLOYED
        assert superseded.config == release.config
        assert superseded.info.description == release.info.description

    def test_deploy(self, make_release):
        release = make_release(status=StatusCode.UNKNOWN)
        assert release.deploy().status == StatusCode.DEPLOYED

    def test_fail_sets_description(self, make_release):
        failed = make_release().fail('Rollback "app" failed: boom')
        assert failed.status == StatusCode.FAILED
        assert failed.info.description == 'Rollback "app" failed: boom'

    def test_with_hooks_replaces_hooks_only(self, app_store):
        v1 = app_store.get("app", 1)
        reordered = tuple(reversed(v1.hooks))

        updated = v1.with_hooks(list(reordered))

        assert updated.hooks == reordered
        assert isinstance(updated.hooks, tuple)
        assert updated.info == v1.info
        assert v1.hooks != reordered

    def test_status_notes_survive_transition(self, make_release):
        release = make_release(notes="visit http://app.local")
        assert release.supersede().info.status.notes == "visit http://app.local"

    def test_is_immutable(self, make_release):
        release = make_release()
        with pytest.raises(AttributeError):
            release.version = 5

    def test_serialization(self, app_store):
        release = app_store.get("app", 1)
        data = release.to_dict()
        assert data["info"]["status"]["code"] == "SUPERSEDED"
        assert data["hooks"][0]["events"] == ["pre-rollback"]
        assert Release.from_dict(data) == release

    def test_chart_str(self):
        assert str(Chart("nginx", "1.2.3")) == "nginx-1.2.3"
