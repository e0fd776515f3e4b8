from __future__ import annotations

import json
from pathlib import Path

import pytest

from fml.cli._dispatcher import build_parser, discover_commands, main


@pytest.fixture
def prompts(fml_tree):
    return fml_tree(
        {
            "chat.fml": (
                "<system><include src=\"parts/persona.fml\"/></system>\n"
                "<user>Hi {{ name }}, plan: {{ plan }}</user>"
            ),
            "parts/persona.fml": "Be brief.<comment>internal</comment>",
            "loop.fml": '<include src="loop.fml"/>',
        }
    )


def test_commands_are_discovered():
    assert {"render", "messages", "deps"} <= set(discover_commands())


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 1
    assert "usage: fml" in capsys.readouterr().out


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["--version"])
    assert exc.value.code == 0
    assert "fml 1.0.0" in capsys.readouterr().out


def test_render_text(prompts, tmp_path: Path, capsys) -> None:
    rc = main(["render", "chat.fml", "--base-dir", str(tmp_path), "--project-root", str(tmp_path), "--var", "name=Bo"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "<system>Be brief.<comment>internal</comment></system>" in out
    assert "<user>Hi Bo, plan: </user>" in out


def test_render_json(prompts, tmp_path: Path, capsys) -> None:
    rc = main(
        [
            "render",
            str(prompts["chat.fml"]),
            "--project-root",
            str(tmp_path),
            "--var",
            'plan={"tier": "pro"}',
            "--json",
        ]
    )
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["path"] == str(prompts["chat.fml"])
    assert payload["dependencies"] == [str(prompts["parts/persona.fml"])]
    assert payload["missingVariables"] == ["name"]
    assert '"tier": "pro"' in payload["content"]


def test_render_with_vars_file(prompts, tmp_path: Path, capsys) -> None:
    vars_file = tmp_path / "vars.yaml"
    vars_file.write_text("name: Ada\nplan: free\n", encoding="utf-8")
    rc = main(
        [
            "render",
            str(prompts["chat.fml"]),
            "--project-root",
            str(tmp_path),
            "--vars-file",
            str(vars_file),
            "--var",
            "plan=team",
        ]
    )
    assert rc == 0
    assert "<user>Hi Ada, plan: team</user>" in capsys.readouterr().out


def test_render_cycle_fails(prompts, tmp_path: Path, capsys) -> None:
    rc = main(["render", str(prompts["loop.fml"]), "--project-root", str(tmp_path), "--json"])
    assert rc == 1
    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "render_error"
    assert err["code"] == "CircularDependencyError"
    assert err["context"]["chain"] == [str(prompts["loop.fml"])] * 2


def test_bad_var_entry(prompts, tmp_path: Path, capsys) -> None:
    rc = main(["render", str(prompts["chat.fml"]), "--project-root", str(tmp_path), "--var", "novalue"])
    assert rc == 1
    assert "expected NAME=VALUE" in capsys.readouterr().err


def test_messages_text(prompts, tmp_path: Path, capsys) -> None:
    rc = main(
        [
            "messages",
            str(prompts["chat.fml"]),
            "--project-root",
            str(tmp_path),
            "--var",
            "name=Bo",
            "--strip-comments",
        ]
    )
    assert rc == 0
    assert capsys.readouterr().out == "[system]\nBe brief.\n\n[user]\nHi Bo, plan:\n"


def test_messages_anthropic_payload(prompts, tmp_path: Path, capsys) -> None:
    rc = main(
        [
            "messages",
            str(prompts["chat.fml"]),
            "--project-root",
            str(tmp_path),
            "--var",
            "name=Bo",
            "--chat",
            "anthropic",
            "--strip-comments",
        ]
    )
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "system": "Be brief.",
        "messages": [{"role": "user", "content": "Hi Bo, plan:"}],
    }


def test_deps(prompts, tmp_path: Path, capsys) -> None:
    rc = main(["deps", str(prompts["chat.fml"]), "--project-root", str(tmp_path)])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [str(prompts["parts/persona.fml"])]


def test_configured_base_dir_is_used_without_flag(fml_tree, tmp_path: Path, capsys) -> None:
    fml_tree({"docs/p.fml": "from docs", "fml.yaml": f"resolution:\n  base_dir: {tmp_path / 'docs'}\n"})
    rc = main(["render", "p.fml", "--project-root", str(tmp_path)])
    assert rc == 0
    assert capsys.readouterr().out == "from docs\n"


def test_base_dir_flag_beats_configured(fml_tree, tmp_path: Path, capsys) -> None:
    fml_tree(
        {
            "docs/p.fml": "from docs",
            "other/p.fml": "from other",
            "fml.yaml": f"resolution:\n  base_dir: {tmp_path / 'docs'}\n",
        }
    )
    rc = main(["render", "p.fml", "--project-root", str(tmp_path), "--base-dir", str(tmp_path / "other")])
    assert rc == 0
    assert capsys.readouterr().out == "from other\n"


@pytest.mark.parametrize("extra", [["--json"], []])
def test_messages_unclosed_comment_fails_cleanly(fml_tree, tmp_path: Path, capsys, extra) -> None:
    paths = fml_tree({"bad.fml": "<user>hi <comment>oops</user>"})
    rc = main(["messages", str(paths["bad.fml"]), "--project-root", str(tmp_path), "--strip-comments", *extra])
    assert rc == 1
    assert "Unclosed <comment> block" in capsys.readouterr().err


def test_missing_document(tmp_path: Path, capsys) -> None:
    rc = main(["deps", "nope.fml", "--base-dir", str(tmp_path), "--project-root", str(tmp_path)])
    assert rc == 1
    assert "Document not found" in capsys.readouterr().err
