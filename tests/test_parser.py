import pytest

from librarian.parser import parent_directory, parse, should_skip_directory


@pytest.fixture
def template(tmp_path):
    root = tmp_path / "template"
    (root / "training" / "archived").mkdir(parents=True)
    (root / "evaluations").mkdir()
    (root / ".git").mkdir()
    (root / "README.md").write_text("# tome\n")
    (root / "tome.yaml").write_text("name: tome\n")
    (root / "training" / "dsu-reports.yaml").write_text("content: []\n")
    (root / "training" / "archived" / "old-dsu-reports.yaml").write_text("content: []\n")
    (root / "evaluations" / "eval-self.yaml").write_text("evaluations: []\n")
    (root / ".git" / "config").write_text("[core]\n")
    return root


def test_parse_template_structure(template):
    root_path = str(template)
    root = parse(root_path)
    assert root.path == root_path
    assert [d.path for d in root.directories] == [
        f"{root_path}/evaluations",
        f"{root_path}/training",
    ]
    assert [f.filepath for f in root.files] == [
        f"{root_path}/README.md",
        f"{root_path}/tome.yaml",
    ]
    assert all(f.directory is root for f in root.files)


def test_parse_nested_directories(template):
    root_path = str(template)
    root = parse(root_path)
    training = root.directories[1]
    assert [f.filepath for f in training.files] == [f"{root_path}/training/dsu-reports.yaml"]
    assert training.files[0].directory is training
    archived = training.directories[0]
    assert archived.path == f"{root_path}/training/archived"
    assert [f.filepath for f in archived.files] == [
        f"{root_path}/training/archived/old-dsu-reports.yaml"
    ]


def test_parse_skips_git_directory(template):
    root = parse(str(template))
    paths = [d.path for d in root.directories]
    assert not any(".git" in path for path in paths)


def test_parse_relative_root(template, monkeypatch):
    monkeypatch.chdir(template)
    root = parse(".")
    assert root.path == "."
    assert [d.path for d in root.directories] == ["evaluations", "training"]
    assert [f.filepath for f in root.directories[0].files] == ["evaluations/eval-self.yaml"]


def test_parse_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse(str(tmp_path / "missing"))


def test_parse_empty_directory(tmp_path):
    root = parse(str(tmp_path))
    assert root.directories == []
    assert root.files == []


@pytest.mark.parametrize(
    ("path", "expected"),
    [(".git", True), ("repo/.git/objects", True), ("repo/.github", True), ("repo/docs", False)],
)
def test_should_skip_directory(path, expected):
    assert should_skip_directory(path) is expected


def test_parent_directory():
    assert parent_directory("root", "a/b/c") == "a/b"
    assert parent_directory("root", "file.md") == "root"
    assert parent_directory("/repo", "/repo/x") == "/repo"