import main as cli
from cfpick.errors import SourcesFailed, ThresholdError


def test_exit_code_on_threshold(monkeypatch, tmp_path):
    seen = {}

    async def fake_run(settings, dry_run=False):
        seen["settings"] = settings
        raise ThresholdError(3, 10)

    monkeypatch.setattr(cli, "run", fake_run)
    out = tmp_path / "cf"
    assert cli.main(["--out", str(out), "--top-n", "4", "--min-total", "12", "--render-mode", "0"]) == 1
    s = seen["settings"]
    assert (s.output, s.top_n_per_carrier, s.min_total_ips, s.render_mode) == (str(out), 4, 12, 0)
    assert not out.exists()


def test_exit_code_on_success(monkeypatch, capsys):
    class Report:
        text = "# Updated (UTC): x\n"

    async def fake_run(settings, dry_run=False):
        return Report()

    monkeypatch.setattr(cli, "run", fake_run)
    assert cli.main(["--dry-run"]) == 0
    assert "# Updated (UTC)" in capsys.readouterr().out


def test_exit_code_on_bad_config(tmp_path):
    assert cli.main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_exit_code_when_every_source_failed(monkeypatch):
    async def fake_run(settings, dry_run=False):
        raise SourcesFailed(["WeTest", "HostMonit"])

    monkeypatch.setattr(cli, "run", fake_run)
    assert cli.main(["--min-total", "0"]) == 1
