from gateway_onboard import cli
from gateway_onboard.errors import DomainError, RequestFailed
from gateway_onboard.types import DerivedRatios, PublishResult, SyncOutcome, TableFetch

ARGV = [
    "--base-url", "https://api.example.com/v1",
    "--source-token", "sk-upstream",
    "--source-model", "gpt-x",
    "--gateway-model", "gw-gpt-x",
    "--input-price", "2",
    "--output-price", "6",
]


def _outcome(publish_status="updated"):
    return SyncOutcome(
        channel_name="api.example.com gpt-x -> gw-gpt-x",
        ratios=DerivedRatios(3.0, 0.8),
        completion=TableFetch("CompletionRatio", table={"gpt-x": 3.0, "gw-gpt-x": 3.0}),
        model=TableFetch("ModelRatio", table={"gpt-x": 0.8, "gw-gpt-x": 0.8}),
        publishes=[
            PublishResult("ModelRatio", publish_status, "boom" if publish_status == "failed" else None),
            PublishResult("CompletionRatio", "updated"),
        ],
    )


def test_cli_passes_arguments_and_token(monkeypatch):
    captured = {}

    def fake_run(*args, **kwargs):
        captured["args"] = args
        captured["kwargs"] = kwargs
        return _outcome()

    monkeypatch.setenv("SYSTEM_TOKEN", "sys-from-env")
    monkeypatch.setattr(cli, "run_onboarding", fake_run)

    assert cli.main(ARGV + ["--model-ratio-baseline", "1.25"]) == 0
    assert captured["args"] == ("https://api.example.com/v1", "sk-upstream", "gpt-x", "gw-gpt-x", 2.0, 6.0)
    assert captured["kwargs"]["system_token"] == "sys-from-env"
    assert captured["kwargs"]["model_ratio_baseline"] == 1.25


def test_cli_exit_code_2_on_publish_failure(monkeypatch):
    monkeypatch.setattr(cli, "run_onboarding", lambda *a, **k: _outcome("failed"))
    assert cli.main(ARGV + ["--json"]) == 2


def test_cli_exit_code_1_on_domain_error(monkeypatch):
    def fake_run(*a, **k):
        raise DomainError("invalid onboarding input: input price must be greater than zero")

    monkeypatch.setattr(cli, "run_onboarding", fake_run)
    assert cli.main(ARGV) == 1


def test_cli_exit_code_1_on_gateway_error(monkeypatch):
    def fake_run(*a, **k):
        raise RequestFailed("create channel", 409, "exists")

    monkeypatch.setattr(cli, "run_onboarding", fake_run)
    assert cli.main(ARGV) == 1


def test_cli_writes_setup_trace(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "run_onboarding", lambda *a, **k: _outcome())
    trace_path = tmp_path / "trace.jsonl"

    assert cli.main(ARGV + ["--trace-path", str(trace_path)]) == 0
    text = trace_path.read_text(encoding="utf-8")
    assert "phase0_setup" in text
    assert "sk-upstream" not in text
