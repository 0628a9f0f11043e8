from __future__ import annotations

from pathlib import Path

import pytest

from taskrun.envfile import materialize, render_template
from taskrun.errors import UnresolvedVariableError
from taskrun.model import Failed, Skipped, Written
from taskrun.variables import VariableResolver

TEMPLATE = (
    "# generated from .env.example\n"
    "COMPOSE_PROJECT_NAME=${COMPOSE_PROJECT_NAME}\n"
    "COMPOSER_AUTH='$COMPOSER_AUTH'\n"
)


@pytest.fixture()
def template(tmp_path: Path) -> Path:
    path = tmp_path / ".env.example"
    path.write_text(TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture()
def resolver() -> VariableResolver:
    return VariableResolver(defaults={"COMPOSE_PROJECT_NAME": "docs", "COMPOSER_AUTH": ""})


def test_writes_rendered_template(tmp_path: Path, template: Path, resolver: VariableResolver) -> None:
    output = tmp_path / ".env"
    result = materialize(template, output, resolver)
    assert result == Written(path=str(output))
    assert output.read_text(encoding="utf-8") == (
        "# generated from .env.example\n"
        "COMPOSE_PROJECT_NAME=docs\n"
        "COMPOSER_AUTH=''\n"
    )


def test_existing_output_is_skipped_and_unchanged(tmp_path: Path, template: Path, resolver: VariableResolver) -> None:
    output = tmp_path / ".env"
    output.write_text("COMPOSE_PROJECT_NAME=mine\n", encoding="utf-8")

    first = materialize(template, output, resolver)
    second = materialize(template, output, resolver)

    assert isinstance(first, Skipped)
    assert isinstance(second, Skipped)
    assert "FORCE=true" in first.reason
    assert output.read_text(encoding="utf-8") == "COMPOSE_PROJECT_NAME=mine\n"


def test_force_overwrites(tmp_path: Path, template: Path, resolver: VariableResolver) -> None:
    output = tmp_path / ".env"
    output.write_text("stale\n", encoding="utf-8")
    result = materialize(template, output, resolver, force=True)
    assert isinstance(result, Written)
    assert "COMPOSE_PROJECT_NAME=docs" in output.read_text(encoding="utf-8")


def test_unresolved_reference_leaves_nothing_on_disk(tmp_path: Path, template: Path) -> None:
    output = tmp_path / ".env"
    resolver = VariableResolver(defaults={"COMPOSE_PROJECT_NAME": "docs"})

    with pytest.raises(UnresolvedVariableError) as exc:
        materialize(template, output, resolver)

    assert exc.value.name == "COMPOSER_AUTH"
    assert not output.exists()
    assert sorted(p.name for p in tmp_path.iterdir()) == [".env.example"]


def test_unresolved_reference_keeps_previous_file_on_force(tmp_path: Path, template: Path) -> None:
    output = tmp_path / ".env"
    output.write_text("KEEP=me\n", encoding="utf-8")

    with pytest.raises(UnresolvedVariableError):
        materialize(template, output, VariableResolver(), force=True)

    assert output.read_text(encoding="utf-8") == "KEEP=me\n"


def test_only_restricts_substitution(tmp_path: Path) -> None:
    template = tmp_path / ".env.example"
    template.write_text("NAME=${COMPOSE_PROJECT_NAME}\nURL=http://localhost:${PORT}\nHOME_DIR=$HOME\n", encoding="utf-8")
    output = tmp_path / ".env"
    resolver = VariableResolver(defaults={"COMPOSE_PROJECT_NAME": "docs"})

    result = materialize(template, output, resolver, only=["COMPOSE_PROJECT_NAME"])

    assert isinstance(result, Written)
    assert output.read_text(encoding="utf-8") == "NAME=docs\nURL=http://localhost:${PORT}\nHOME_DIR=$HOME\n"


def test_missing_template_fails(tmp_path: Path, resolver: VariableResolver) -> None:
    output = tmp_path / ".env"
    result = materialize(tmp_path / "nope.example", output, resolver)
    assert isinstance(result, Failed)
    assert "nope.example" in result.reason
    assert not output.exists()


def test_render_template_ignores_shell_defaults_syntax() -> None:
    resolver = VariableResolver(defaults={"PORT": "8080"})
    assert render_template("P=${PORT:-3000}", resolver) == "P=${PORT:-3000}"
    assert render_template("P=${PORT}", resolver) == "P=8080"
