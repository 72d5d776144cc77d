import shutil
from pathlib import Path

import pytest

from js2ts import (
    ConversionSettings,
    DeclarationParseError,
    InputNotFoundError,
    JsToTsTransformer,
    TransformationResult,
    convert_js_to_ts,
)

SAMPLES = Path(__file__).parent / "samples" / "js-project"

USER_DTS = """
interface User {
  name: string;
  email: string;
  age: number;
}

declare function createUser(name: string, email: string, age: number): User;
"""


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #
def _project(root: Path, files: dict[str, str]) -> Path:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return root


# --------------------------------------------------------------------------- #
# Tests
# --------------------------------------------------------------------------- #
def test_default_options():
    settings = ConversionSettings(input="/path/to/input")
    assert settings.output is None
    assert settings.overwrite is False
    assert settings.strict is True
    assert settings.ignore == []
    assert settings.keep_original is True
    assert settings.verbose is False


def test_create_user_end_to_end(tmp_path: Path):
    _project(tmp_path, {
        "user.js": "function createUser(name, email, age) {\n  return { name, email, age };\n}\n",
        "user.d.ts": USER_DTS,
    })

    results = convert_js_to_ts(input=str(tmp_path))

    out_path = tmp_path / "ts-output" / "user.ts"
    assert results == [
        TransformationResult(original_path=str(tmp_path / "user.js"), new_path=str(out_path), success=True)
    ]
    out = out_path.read_text()
    assert "function createUser(name: string, email: string, age: number): User {" in out
    assert out.startswith("/*\n * User interface (imported from .d.ts)\n * interface User {")
    # original kept by default
    assert (tmp_path / "user.js").exists()


def test_sample_project(tmp_path: Path):
    project = tmp_path / "js-project"
    shutil.copytree(SAMPLES, project)

    results = convert_js_to_ts(input=str(project), output=str(tmp_path / "out"))
    assert [r.success for r in results] == [True]

    out = (tmp_path / "out" / "user.ts").read_text()
    assert "function createUser(name: string, email: string, age: number): User {" in out
    assert "function validateUser(user: User): boolean {" in out
    assert "function addUser(user: User): boolean {" in out
    assert "function findUserByEmail(email: string): User | null {" in out
    assert "userDatabase.find((user: User) => user.email === email)" in out
    assert "const userDatabase = [];" in out
    assert "module.exports = {" in out


def test_keep_original_false_deletes_source(tmp_path: Path):
    _project(tmp_path, {"a.js": "const a = 1;\n"})
    results = convert_js_to_ts(input=str(tmp_path), keep_original=False)

    assert results[0].success
    assert not (tmp_path / "a.js").exists()
    assert (tmp_path / "ts-output" / "a.ts").read_text() == "const a = 1;\n"


@pytest.mark.parametrize("keep_original", [True, False])
def test_failed_file_is_never_deleted(tmp_path: Path, keep_original: bool):
    _project(tmp_path, {"bad.js": "function broken( {\n"})
    results = convert_js_to_ts(input=str(tmp_path), keep_original=keep_original)

    assert results[0].success is False
    assert (tmp_path / "bad.js").exists()


def test_failures_do_not_abort_the_run(tmp_path: Path):
    _project(tmp_path, {
        "bad.js": "function broken( {\n",
        "good.js": "function send(email) {}\nconst f = (email) => email;\n",
    })

    results = convert_js_to_ts(input=str(tmp_path))

    assert len(results) == 2
    bad, good = results
    assert bad.original_path == str(tmp_path / "bad.js")
    assert bad.success is False
    assert bad.new_path == ""
    assert "bad.js" in bad.error
    assert good.success is True
    assert "const f = (email: string) => email;" in Path(good.new_path).read_text()
    assert not (tmp_path / "ts-output" / "bad.ts").exists()


def test_missing_input_is_fatal(tmp_path: Path):
    with pytest.raises(InputNotFoundError) as exc_info:
        convert_js_to_ts(input=str(tmp_path / "missing"))
    assert isinstance(exc_info.value, FileNotFoundError)
    assert "Input path does not exist" in str(exc_info.value)


def test_broken_declarations_abort_the_run(tmp_path: Path):
    _project(tmp_path, {"a.js": "const a = 1;\n", "types/broken.d.ts": "interface {\n"})
    with pytest.raises(DeclarationParseError):
        convert_js_to_ts(input=str(tmp_path))
    assert not (tmp_path / "ts-output" / "a.ts").exists()


def test_directory_structure_is_mirrored(tmp_path: Path):
    src = _project(tmp_path / "src", {
        "index.js": "const a = 1;\n",
        "lib/util/helpers.js": "const b = 2;\n",
        "components/Button.jsx": "const Button = () => <button />;\n",
    })
    out = tmp_path / "build"

    results = convert_js_to_ts(input=str(src), output=str(out))

    assert all(r.success for r in results)
    assert sorted(Path(r.new_path).relative_to(out).as_posix() for r in results) == [
        "components/Button.tsx",
        "index.ts",
        "lib/util/helpers.ts",
    ]


def test_default_and_user_exclusions(tmp_path: Path):
    _project(tmp_path, {
        "app.js": "const a = 1;\n",
        "app.min.js": "const a=1;\n",
        "node_modules/pkg/index.js": "module.exports = 1;\n",
        "dist/bundle.js": "var x;\n",
        "vendor/lib.js": "var y;\n",
        "types.d.ts": "interface T {}\n",
    })

    results = convert_js_to_ts(input=str(tmp_path), ignore=["vendor/**"])
    assert [Path(r.original_path).name for r in results] == ["app.js"]


def test_single_file_input(tmp_path: Path):
    _project(tmp_path, {
        "lib/user.js": "function createUser(name, email, age) {}\n",
        "lib/other.js": "const x = 1;\n",
        "lib/types/user.d.ts": USER_DTS,
    })
    transformer = JsToTsTransformer(ConversionSettings(input=str(tmp_path / "lib" / "user.js")))

    results = transformer.transform()

    assert len(results) == 1
    out_path = tmp_path / "lib" / "ts-output" / "user.ts"
    assert results[0].new_path == str(out_path)
    assert "): User {}" in out_path.read_text()
    assert set(transformer.type_definitions) == {"User", "createUser"}


def test_output_root_is_created_even_without_sources(tmp_path: Path):
    results = convert_js_to_ts(input=str(tmp_path))
    assert results == []
    assert (tmp_path / "ts-output").is_dir()


def test_settings_instance_with_overrides(tmp_path: Path):
    _project(tmp_path, {"a.js": "const a = 1;\n"})
    settings = ConversionSettings(input=str(tmp_path))
    results = convert_js_to_ts(settings, output=str(tmp_path / "elsewhere"))
    assert results[0].new_path == str(tmp_path / "elsewhere" / "a.ts")
