"""Tests for the classloom command-line entry point."""

from pathlib import Path

import pytest
from classloom.__main__ import build_arg_parser, collect_sources, main, plan_outputs


FOO_SOURCE = '''
namespace Demo
{
    public class Foo : Bar
    {
        public int bar = 5;
    }
}
'''

COLOR_SOURCE = '''
enum Color { Red, Green }
'''


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small C# tree with build output folders that must be ignored."""
    (tmp_path / "Models").mkdir()
    (tmp_path / "bin").mkdir()
    (tmp_path / ".git").mkdir()
    (tmp_path / "Foo.cs").write_text(FOO_SOURCE, encoding="utf-8")
    (tmp_path / "Models" / "Color.cs").write_text(COLOR_SOURCE, encoding="utf-8")
    (tmp_path / "bin" / "Generated.cs").write_text("class Generated {}", encoding="utf-8")
    (tmp_path / ".git" / "Hidden.cs").write_text("class Hidden {}", encoding="utf-8")
    (tmp_path / "README.md").write_text("# demo", encoding="utf-8")
    return tmp_path


# =========================================================================
# Tests: Planning
# =========================================================================

class TestPlanning:
    def test_collect_sources_skips_build_dirs(self, project):
        found = [p.relative_to(project).as_posix() for p in collect_sources(project)]
        assert found == ["Foo.cs", "Models/Color.cs"]

    def test_single_file_default_output(self, project):
        src = project / "Foo.cs"
        assert plan_outputs(src, None, False) == [(src, project / "Foo.puml")]

    def test_single_file_into_directory(self, project, tmp_path_factory):
        out_dir = tmp_path_factory.mktemp("out")
        src = project / "Foo.cs"
        assert plan_outputs(src, out_dir, False) == [(src, out_dir / "Foo.puml")]

    def test_directory_mirrors_layout(self, project, tmp_path_factory):
        out_dir = tmp_path_factory.mktemp("out")
        jobs = plan_outputs(project, out_dir, True)
        assert [dst.relative_to(out_dir).as_posix() for _, dst in jobs] == ["Foo.puml", "Models/Color.puml"]

    def test_indent_options_exclusive(self):
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args(["Foo.cs", "--tab", "--indent", "2"])


# =========================================================================
# Tests: Conversion
# =========================================================================

class TestMain:
    def test_convert_single_file(self, project):
        assert main([str(project / "Foo.cs")]) == 0
        text = (project / "Foo.puml").read_text(encoding="utf-8")
        assert text == (
            "@startuml\n"
            "class Foo {\n"
            "    + bar : int = 5\n"
            "}\n"
            "Foo <|-- Bar\n"
            "@enduml\n"
        )

    def test_convert_with_tab(self, project, tmp_path_factory):
        out = tmp_path_factory.mktemp("out") / "diagram.puml"
        assert main([str(project / "Foo.cs"), str(out), "--tab"]) == 0
        assert "\t+ bar : int = 5\n" in out.read_text(encoding="utf-8")

    def test_convert_with_indent_size(self, project):
        assert main([str(project / "Foo.cs"), "--indent", "2"]) == 0
        assert "\n  + bar : int = 5\n" in (project / "Foo.puml").read_text(encoding="utf-8")

    def test_indent_from_environment(self, project, monkeypatch):
        monkeypatch.setenv("CLASSLOOM_INDENT_SIZE", "1")
        assert main([str(project / "Foo.cs")]) == 0
        assert "\n + bar : int = 5\n" in (project / "Foo.puml").read_text(encoding="utf-8")

    @pytest.mark.parametrize("value", ["LOUD", "", "  "])
    def test_bad_log_level_from_environment(self, project, monkeypatch, value):
        monkeypatch.setenv("CLASSLOOM_LOG_LEVEL", value)
        assert build_arg_parser().parse_args(["Foo.cs"]).log_level == "INFO"
        assert main([str(project / "Foo.cs")]) == 0

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("CLASSLOOM_LOG_LEVEL", "debug")
        assert build_arg_parser().parse_args(["Foo.cs"]).log_level == "DEBUG"

    def test_convert_directory(self, project, tmp_path_factory):
        out_dir = tmp_path_factory.mktemp("out")
        assert main([str(project), str(out_dir), "--dir"]) == 0
        assert (out_dir / "Foo.puml").is_file()
        color = (out_dir / "Models" / "Color.puml").read_text(encoding="utf-8")
        assert "enum Color {\n    Red,\n    Green,\n}\n" in color
        assert not (out_dir / "bin").exists()

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "Nope.cs")]) == 1

    def test_dir_mode_requires_directory(self, project):
        assert main([str(project / "Foo.cs"), "--dir"]) == 1

    def test_unsupported_file_fails(self, project):
        assert main([str(project / "README.md")]) == 1
        assert not (project / "README.puml").exists()
