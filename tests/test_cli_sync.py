import json

import pytest
from botocore.exceptions import ClientError
from typer.testing import CliRunner

from gluesync.cli import cli as cli_module
from gluesync.cli.commands import table as table_module
from gluesync.cli.common.context import GlueAppContext
from gluesync.cli.common import output as output_module
from gluesync.cli.common.output import Out

runner = CliRunner()

TABLE_INPUT = json.dumps({"Name": "tbl", "TableType": "EXTERNAL_TABLE"})


@pytest.fixture
def use_catalog(monkeypatch, tmp_path):
    """Route the CLI to an in-memory catalog and a temporary outputs file."""
    output_file = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    monkeypatch.setattr(output_module.console, "width", 200)
    for name in ("DATABASE-NAME", "TABLE-NAME", "TABLE-INPUT", "CATALOG-ID", "WAIT"):
        monkeypatch.delenv(f"INPUT_{name}", raising=False)

    def _use(catalog, region="us-east-1"):
        def _build(profile, region_opt):
            return GlueAppContext(
                profile=profile,
                region=region,
                partition="aws",
                session=None,
                adapter=catalog,
            )

        monkeypatch.setattr(table_module, "build_glue_context", _build)
        return output_file

    return _use


def _outputs(path) -> dict[str, str]:
    return dict(line.split("=", 1) for line in path.read_text().splitlines())


def _sync(*extra: str, env: dict | None = None):
    return runner.invoke(
        cli_module.app,
        ["table", "sync", "--database-name", "db", "--table-name", "tbl", *extra],
        env=env,
    )


def test_sync_creates_missing_table_and_writes_outputs(use_catalog, fake_catalog):
    catalog = fake_catalog(["missing", {"Name": "tbl"}])
    output_file = use_catalog(catalog)

    result = _sync("--table-input", TABLE_INPUT)

    assert result.exit_code == 0, result.output
    assert catalog.names() == ["get_table", "create_table", "get_table"]
    assert _outputs(output_file) == {
        "table-name": "tbl",
        "database-name": "db",
        "table-arn": "arn:aws:glue:us-east-1:*:table/db/tbl",
        "action": "created",
    }


def test_sync_updates_existing_table(use_catalog, fake_catalog):
    catalog = fake_catalog([{"Name": "tbl"}])
    output_file = use_catalog(catalog)

    result = _sync("--table-input", TABLE_INPUT, "--catalog-id", "123456789012")

    assert result.exit_code == 0, result.output
    assert catalog.names() == ["get_table", "update_table"]
    outputs = _outputs(output_file)
    assert outputs["action"] == "updated"
    assert outputs["table-arn"] == "arn:aws:glue:us-east-1:123456789012:table/db/tbl"


def test_sync_reads_action_inputs_from_env(use_catalog, fake_catalog):
    catalog = fake_catalog([{"Name": "tbl"}])
    output_file = use_catalog(catalog)

    result = runner.invoke(
        cli_module.app,
        ["table", "sync"],
        env={
            "INPUT_DATABASE-NAME": "db",
            "INPUT_TABLE-NAME": "tbl",
            "INPUT_TABLE-INPUT": TABLE_INPUT,
            "INPUT_CATALOG-ID": "",
        },
    )

    assert result.exit_code == 0, result.output
    assert catalog.calls[0] == ("get_table", "db", "tbl", None)
    assert _outputs(output_file)["table-name"] == "tbl"


def test_sync_reads_table_input_file(use_catalog, fake_catalog, tmp_path):
    catalog = fake_catalog([{"Name": "tbl"}])
    use_catalog(catalog)
    path = tmp_path / "table.json"
    path.write_text(TABLE_INPUT, encoding="utf-8")

    result = _sync("--table-input-file", str(path))

    assert result.exit_code == 0, result.output
    assert catalog.calls[1][2]["TableType"] == "EXTERNAL_TABLE"


def test_sync_no_wait_skips_polling(use_catalog, fake_catalog):
    catalog = fake_catalog(["missing"])
    use_catalog(catalog)

    result = _sync("--table-input", TABLE_INPUT, "--no-wait")

    assert result.exit_code == 0, result.output
    assert catalog.names() == ["get_table", "create_table"]


def test_sync_malformed_json_fails_before_remote_calls(use_catalog, fake_catalog):
    catalog = fake_catalog()
    output_file = use_catalog(catalog)

    result = _sync("--table-input", '{"Name": "tbl"')

    assert result.exit_code == 1
    assert "Failed to parse table-input JSON" in result.output
    assert catalog.calls == []
    assert not output_file.exists()


def test_sync_requires_table_input(use_catalog, fake_catalog):
    use_catalog(fake_catalog())

    result = _sync()

    assert result.exit_code == 2
    assert "Missing TableInput" in result.output


def test_sync_rejects_both_table_input_sources(use_catalog, fake_catalog, tmp_path):
    use_catalog(fake_catalog())
    path = tmp_path / "table.json"
    path.write_text(TABLE_INPUT, encoding="utf-8")

    result = _sync("--table-input", TABLE_INPUT, "--table-input-file", str(path))

    assert result.exit_code == 2


def test_sync_prints_aws_error_details(use_catalog, fake_catalog):
    error = ClientError(
        {
            "Error": {"Code": "AccessDeniedException", "Message": "nope"},
            "ResponseMetadata": {"HTTPStatusCode": 403, "RequestId": "req-42"},
        },
        "GetTable",
    )
    catalog = fake_catalog([error])
    output_file = use_catalog(catalog)

    result = _sync("--table-input", TABLE_INPUT)

    assert result.exit_code == 1
    assert "AccessDeniedException" in result.output
    assert "req-42" in result.output
    assert "403" in result.output
    assert "Action failed" in result.output
    assert catalog.names() == ["get_table"]
    assert not output_file.exists()


def test_sync_reports_visibility_timeout(use_catalog, fake_catalog):
    catalog = fake_catalog(["missing"])
    use_catalog(catalog)

    result = _sync("--table-input", TABLE_INPUT, "--max-attempts", "2", "--delay", "0")

    assert result.exit_code == 1
    assert "did not become visible" in result.output
    assert catalog.names() == ["get_table", "create_table", "get_table", "get_table"]


def test_sync_confirm_declined_writes_nothing(use_catalog, fake_catalog, monkeypatch):
    catalog = fake_catalog([{"Name": "tbl"}])
    use_catalog(catalog)
    monkeypatch.setattr(Out, "confirm", lambda self, message, default=False: False)

    result = _sync("--table-input", TABLE_INPUT, "--confirm")

    assert result.exit_code == 1
    assert "Nothing was changed" in result.output
    assert catalog.names() == ["get_table"]


def test_sync_emits_annotations_in_actions(use_catalog, fake_catalog, monkeypatch):
    catalog = fake_catalog([{"Name": "tbl"}])
    use_catalog(catalog)
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

    result = _sync("--table-input", json.dumps({"Name": "legacy"}))

    assert result.exit_code == 0, result.output
    assert "::warning::" in result.output


def test_sync_keeps_long_annotations_on_one_line(use_catalog, fake_catalog, monkeypatch):
    message = (
        "User: arn:aws:iam::123456789012:role/deploy is not authorized to perform: "
        "glue:GetTable on resource: arn:aws:glue:us-east-1:123456789012:table/db/tbl"
    )
    error = ClientError(
        {
            "Error": {"Code": "AccessDeniedException", "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": 403, "RequestId": "req-42"},
        },
        "GetTable",
    )
    use_catalog(fake_catalog([error]))
    monkeypatch.setattr(output_module.console, "width", 80)
    monkeypatch.setenv("GITHUB_ACTIONS", "true")

    result = _sync("--table-input", TABLE_INPUT)

    assert result.exit_code == 1
    annotations = [
        line for line in result.output.splitlines() if line.startswith("::error::")
    ]
    assert len(annotations) == 1
    assert "glue:GetTable on resource" in annotations[0]
    assert annotations[0].endswith("table/db/tbl")


def test_sync_help_does_not_build_aws_context(monkeypatch):
    def _fail(profile, region):
        raise AssertionError("context must not be built for --help")

    monkeypatch.setattr(table_module, "build_glue_context", _fail)

    result = runner.invoke(cli_module.app, ["table", "sync", "--help"])

    assert result.exit_code == 0, result.output
    assert "--database-name" in result.output
