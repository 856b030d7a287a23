import json

from correlator import cli

from factories import build_results_xml, oval

POLICY = """
rules:
  - rule_id: xccdf_org.ssgproject.content_rule_sshd_enabled
    checks:
      - id: sshd_enabled
  - rule_id: xccdf_org.ssgproject.content_rule_package_aide_installed
    checks:
      - id: package_aide_installed
""".strip()


def write_inputs(tmp_path, outcome_sshd="fail", outcome_aide="pass", target="host1"):
    arf_path = tmp_path / "arf.xml"
    arf_path.write_bytes(
        build_results_xml(
            target=target,
            rules=[
                ("xccdf_org.ssgproject.content_rule_sshd_enabled", [oval("oval:ssg-sshd_enabled:def:1")]),
                ("xccdf_org.ssgproject.content_rule_package_aide_installed", [oval("oval:ssg-package_aide_installed:def:1")]),
            ],
            results=[
                ("xccdf_org.ssgproject.content_rule_sshd_enabled", outcome_sshd),
                ("xccdf_org.ssgproject.content_rule_package_aide_installed", outcome_aide),
            ],
        )
    )
    policy_path = tmp_path / "policy.yaml"
    policy_path.write_text(POLICY, encoding="utf-8")
    return arf_path, policy_path


def test_cli_generates_json_report(tmp_path, capsys):
    arf_path, policy_path = write_inputs(tmp_path)
    output_path = tmp_path / "out" / "observations.json"

    exit_code = cli.main(["--arf", str(arf_path), "--policy", str(policy_path), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert "Correlation Summary" in captured.out
    assert exit_code == 2
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["summary"]["fail"] == 1
    assert data["summary"]["pass"] == 1
    assert data["passed"] is False
    assert [item["check_id"] for item in data["observations"]] == ["sshd_enabled", "package_aide_installed"]


def test_cli_passes_on_clean_results(tmp_path, capsys):
    arf_path, policy_path = write_inputs(tmp_path, outcome_sshd="pass")

    exit_code = cli.main(["--arf", str(arf_path), "--policy", str(policy_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "JSON Report" in captured.out
    assert "Status    : PASS" in captured.out


def test_cli_uses_workspace_from_config(tmp_path, capsys):
    results_dir = tmp_path / "openscap" / "results"
    results_dir.mkdir(parents=True)
    arf_path, policy_path = write_inputs(tmp_path, outcome_sshd="notapplicable")
    arf_path.rename(results_dir / "arf.xml")
    config_path = tmp_path / "correlator.yaml"
    config_path.write_text(f"workspace: {tmp_path}\nprofile: cis\n", encoding="utf-8")
    output_path = tmp_path / "observations.json"

    exit_code = cli.main(["--config", str(config_path), "--policy", str(policy_path), "--out", str(output_path)])

    assert exit_code == 1
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["profile"] == "cis"
    assert data["summary"]["error"] == 1


def test_cli_aborts_without_partial_report(tmp_path, capsys):
    arf_path, policy_path = write_inputs(tmp_path, outcome_aide="notchecked")
    output_path = tmp_path / "observations.json"

    exit_code = cli.main(["--arf", str(arf_path), "--policy", str(policy_path), "--out", str(output_path)])

    captured = capsys.readouterr()
    assert exit_code == cli.ABORT_EXIT_CODE
    assert "notchecked" in captured.err
    assert not output_path.exists()


def test_cli_aborts_when_target_missing(tmp_path, capsys):
    arf_path, policy_path = write_inputs(tmp_path, target=None)

    exit_code = cli.main(["--arf", str(arf_path), "--policy", str(policy_path)])

    assert exit_code == cli.ABORT_EXIT_CODE
    assert "target" in capsys.readouterr().err


def test_cli_requires_workspace_without_arf(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("CORRELATOR_WORKSPACE", raising=False)
    monkeypatch.delenv("CORRELATOR_RESULTS_FILE", raising=False)
    _, policy_path = write_inputs(tmp_path)

    exit_code = cli.main(["--policy", str(policy_path)])

    assert exit_code == cli.ABORT_EXIT_CODE
    assert "workspace must be set" in capsys.readouterr().err


def test_cli_aborts_on_broken_policy_yaml(tmp_path, capsys):
    arf_path, policy_path = write_inputs(tmp_path)
    policy_path.write_text("rules: [unclosed", encoding="utf-8")

    exit_code = cli.main(["--arf", str(arf_path), "--policy", str(policy_path)])

    assert exit_code == cli.ABORT_EXIT_CODE
    assert "Correlation aborted" in capsys.readouterr().err


def test_cli_aborts_on_broken_config_yaml(tmp_path, capsys):
    arf_path, policy_path = write_inputs(tmp_path)
    config_path = tmp_path / "correlator.yaml"
    config_path.write_text("workspace: [x", encoding="utf-8")

    exit_code = cli.main(["--config", str(config_path), "--arf", str(arf_path), "--policy", str(policy_path)])

    assert exit_code == cli.ABORT_EXIT_CODE
    assert "not valid YAML" in capsys.readouterr().err
