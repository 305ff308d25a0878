from librarian.domain import Directory, File


def _tree():
    child = Directory(path="root/training")
    child.files.append(File(filepath="root/training/dsu.yaml", directory=child))
    root = Directory(path="root", directories=[child])
    root.files.append(File(filepath="root/README.md", directory=root))
    return root, child


def test_status_of_valid_tree_lists_root_then_children():
    root, child = _tree()
    status = root.status()
    lines = status.splitlines()
    assert lines[0] == " ✅ Path [root] has a total of 1 directories and 1 files."
    assert lines[1].startswith(" ✅ Path [root/training]")
    assert status.endswith(child.status())


def test_status_reports_error():
    root, _ = _tree()
    root.error = ValueError("boom")
    first_line = root.status().splitlines()[0]
    assert first_line.startswith(" ❌ Path [root]")
    assert first_line.endswith("Validation failed: boom")


def test_status_of_leaf_ends_with_newline():
    leaf = Directory(path="leaf")
    assert leaf.status().endswith("files.\n")
    assert leaf.status().count("\n") == 1


def test_file_keeps_reference_to_directory():
    root, child = _tree()
    assert child.files[0].directory is child
    assert root.files[0].directory is root
    assert "directory" not in repr(child.files[0])


def test_directories_compare_by_identity():
    first = Directory(path="a")
    second = Directory(path="a")
    assert (first == second) is False
    assert [first].count(second) == 0
    assert [first, second, first].count(first) == 2
    assert (first == first) is True
    assert [second].index(second) == 0