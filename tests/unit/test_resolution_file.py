"""
Tests for resolution documents in deplock.resolution_file.
"""

import json

import pytest

from deplock.build import LocalProject
from deplock.errors import ConfigurationError, ErrorCode
from deplock.interfaces.resolution import ModuleComponentIdentifier, ProjectComponentIdentifier
from deplock.resolution_file import load_document, parse_component, parse_document


class TestParseComponent:

    def test_module(self):
        component = parse_component("org.example:lib:1.2")
        assert component.id == ModuleComponentIdentifier("org.example", "lib", "1.2")

    def test_project(self):
        assert parse_component({"project": ":core"}).id == ProjectComponentIdentifier(":core")

    @pytest.mark.parametrize("raw", ["a:b", "a:b:c:d", "a::1.0", 12, {"module": "a:b:1"}, {"project": 1}])
    def test_invalid(self, raw):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_component(raw, path="res.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "res.yaml" in exc_info.value.message


class TestLoadDocument:

    def test_sample_document(self, resolution_file):
        document = load_document(str(resolution_file))
        assert sorted(document.configurations) == ["annotationProcessor", "compile", "testRuntime"]
        assert document.resolvable_names() == ["compile", "testRuntime"]
        assert not document.configurations["annotationProcessor"].resolvable
        assert len(document.configurations["compile"].components) == 3

    def test_json_document(self, tmp_path):
        path = tmp_path / "resolution.json"
        path.write_text(json.dumps({"configurations": {"compile": {"components": ["a:b:1.0"]}}}))
        document = load_document(str(path))
        assert document.resolvable_names() == ["compile"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_document(str(tmp_path / "nope.yaml"))
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("configurations: [unclosed\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_document(str(path))
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


class TestParseDocument:

    @pytest.mark.parametrize("payload", [
        None,
        [],
        {"configs": {}},
        {"configurations": {"compile": ["a:b:1"]}},
        {"configurations": {"compile": {"resolvable": "yes"}}},
        {"configurations": {"compile": {"components": "a:b:1"}}},
    ])
    def test_invalid_structure(self, payload):
        with pytest.raises(ConfigurationError):
            parse_document(payload)

    def test_empty_configuration(self):
        document = parse_document({"configurations": {"compile": None}})
        assert document.configurations["compile"].components == ()
        assert document.configurations["compile"].resolvable

    def test_resolve_replays_components(self):
        document = parse_document({"configurations": {"compile": {"components": ["a:b:1.0"]}}})
        result = document.resolve("compile", [])
        assert [c.id.display_name for c in result] == ["a:b:1.0"]

    def test_create_configurations(self, resolution_file, tmp_path):
        project = LocalProject(tmp_path)
        load_document(str(resolution_file)).create_configurations(project)
        names = {c.name: c.can_be_resolved for c in project.configurations}
        assert names == {"annotationProcessor": False, "compile": True, "testRuntime": True}
