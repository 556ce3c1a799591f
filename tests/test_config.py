"""Tests for option handling and YAML configuration loading."""

import textwrap

from depscope.config import AnalysisOptions, DepscopeConfig, load_config


def _write(path, text):
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return str(path)


class TestAnalysisOptions:
    def test_defaults(self):
        options = AnalysisOptions()

        assert options.include_patterns == []
        assert options.exclude_patterns == []
        assert options.detect_circular_dependencies is True
        assert options.include_dev_dependencies is True
        assert options.usage_top_n == 10

    def test_camel_case_keys(self):
        options = AnalysisOptions.from_dict({
            "includePatterns": ["src/**"],
            "excludePatterns": ["**/test/**"],
            "customRelationTypes": ["custom"],
            "detectCircularDependencies": False,
            "unknownOption": 1,
        })

        assert options.include_patterns == ["src/**"]
        assert options.exclude_patterns == ["**/test/**"]
        assert options.custom_relation_types == ["custom"]
        assert options.detect_circular_dependencies is False

    def test_none_and_string_lists(self):
        options = AnalysisOptions.from_dict({"include_patterns": None, "exclude_patterns": "x/**"})

        assert options.include_patterns == []
        assert options.exclude_patterns == ["x/**"]

    def test_empty_mapping(self):
        assert AnalysisOptions.from_dict({}) == AnalysisOptions()
        assert AnalysisOptions.from_dict(None) == AnalysisOptions()


class TestLoadConfig:
    def test_no_file_gives_defaults(self, tmp_path):
        assert load_config(repo_root=str(tmp_path)) == DepscopeConfig()

    def test_root_file_is_found(self, tmp_path):
        _write(tmp_path / "depscope.yaml", """
            version: 2
            analysis:
              include_patterns:
                - "src/**/*.ts"
              usage_top_n: 3
            output:
              indent: 4
        """)

        config = load_config(repo_root=str(tmp_path))

        assert config.version == "2"
        assert config.analysis.include_patterns == ["src/**/*.ts"]
        assert config.analysis.usage_top_n == 3
        assert config.output.indent == 4
        assert config.output.path is None

    def test_analysis_subdirectory_is_searched(self, tmp_path):
        (tmp_path / "analysis").mkdir()
        _write(tmp_path / "analysis" / "depscope.yaml", """
            analysis:
              excludePatterns: ["**/test/**"]
        """)

        config = load_config(repo_root=str(tmp_path))

        assert config.analysis.exclude_patterns == ["**/test/**"]

    def test_explicit_path(self, tmp_path):
        path = _write(tmp_path / "custom.yaml", """
            analysis:
              detect_circular_dependencies: false
        """)

        config = load_config(config_path=path, repo_root=str(tmp_path))

        assert config.analysis.detect_circular_dependencies is False

    def test_non_mapping_file_is_ignored(self, tmp_path):
        _write(tmp_path / "depscope.yaml", """
            - just
            - a list
        """)

        assert load_config(repo_root=str(tmp_path)) == DepscopeConfig()


class TestOptionCoercion:
    def test_numeric_string_top_n(self):
        assert AnalysisOptions.from_dict({"usage_top_n": "5"}).usage_top_n == 5

    def test_unusable_top_n_falls_back_to_default(self):
        assert AnalysisOptions.from_dict({"usageTopN": "many"}).usage_top_n == 10
        assert AnalysisOptions.from_dict({"usage_top_n": None}).usage_top_n == 10
        assert AnalysisOptions.from_dict({"usage_top_n": True}).usage_top_n == 10

    def test_negative_top_n_is_clamped(self):
        assert AnalysisOptions.from_dict({"usage_top_n": -3}).usage_top_n == 0

    def test_non_list_patterns_are_dropped(self):
        options = AnalysisOptions.from_dict({
            "include_patterns": 5,
            "exclude_patterns": ["ok/**", 7, None],
        })

        assert options.include_patterns == []
        assert options.exclude_patterns == ["ok/**"]

    def test_yaml_string_top_n_reaches_analysis(self, tmp_path):
        _write(tmp_path / "depscope.yaml", """
            analysis:
              usage_top_n: "1"
        """)

        config = load_config(repo_root=str(tmp_path))

        assert config.analysis.usage_top_n == 1
