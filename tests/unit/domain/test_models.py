import pytest

from stylepruner.domain.exceptions import AnalysisError
from stylepruner.domain.models.analysis import (
    AnalysisConfig,
    AnalysisResult,
    RewriteReport,
    RewriteTarget,
    RewriteFailure,
)
from stylepruner.domain.models.common import FileContent, FilePath


def test_analysis_config_mappings():
    config = AnalysisConfig(root_path="/srv/site", raw_content=".a{}", extra={"ignore": [".b"], "media": None})

    assert config.as_mapping() == {"root-path": "/srv/site", "raw-content": ".a{}"}
    assert config.to_uncssrc() == {"htmlroot": "/srv/site", "raw": ".a{}", "ignore": [".b"]}


def test_analysis_config_without_raw_content():
    config = AnalysisConfig(root_path="/srv/site")

    assert config.as_mapping() == {"root-path": "/srv/site"}
    assert config.to_uncssrc() == {"htmlroot": "/srv/site"}


def test_analysis_config_is_immutable():
    config = AnalysisConfig(root_path="/srv/site", extra={"ignore": []})

    with pytest.raises(AttributeError):
        config.root_path = "/elsewhere"
    with pytest.raises(TypeError):
        config.extra["media"] = "print"


def test_extra_cannot_override_wire_keys():
    config = AnalysisConfig(root_path="/srv/site", raw_content="p{}", extra={"htmlroot": "/tmp", "raw": "x"})

    assert config.to_uncssrc() == {"htmlroot": "/srv/site", "raw": "p{}"}


def test_analysis_result_success_flag():
    assert AnalysisResult(0, "").succeeded
    assert not AnalysisResult(2, "Error").succeeded


def test_rewrite_target_substitutes_by_position():
    content = FileContent("<style>AAA</style>--<style>BB</style>")
    target = RewriteTarget(path=FilePath("x.html"), content=content, spans=[(7, 10), (27, 29)])

    assert target.regions() == ["AAA", "BB"]
    assert target.substitute(["a", "b"]) == "<style>a</style>--<style>b</style>"


def test_rewrite_target_rejects_wrong_number_of_replacements():
    target = RewriteTarget(path=FilePath("x.html"), content=FileContent("<style>A</style>"), spans=[(7, 8)])

    with pytest.raises(ValueError):
        target.substitute([])


def test_report_counts():
    report = RewriteReport(skipped=[FilePath("a.html")])
    assert report.ok
    assert report.total == 1

    report.failures.append(RewriteFailure(FilePath("b.html"), AnalysisError("boom")))
    assert not report.ok
    assert report.total == 2


def test_analysis_error_message_includes_cause_and_output():
    error = AnalysisError("uncss failed", cause=OSError("no such file"), partial_output="partial\n")

    assert str(error) == "uncss failed: no such file :: partial"
    assert error.partial_output == "partial\n"
