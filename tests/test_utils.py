from gem_catalog.utils import filename_component, invalid_filename_characters, is_valid_filename


def test_at_sign_is_rejected():
    assert not is_valid_filename("my@file.txt")
    assert invalid_filename_characters("my@file.txt") == ["@"]


def test_plain_name_is_accepted():
    assert is_valid_filename("myfile.txt")


def test_only_the_filename_component_is_checked():
    assert is_valid_filename("/projects/@alias@/levels/main.prefab")
    assert not is_valid_filename("/projects/levels/main@2.prefab")
    assert not is_valid_filename("C:\\projects\\main@2.prefab")


def test_custom_disallowed_characters_are_reported_sorted():
    assert invalid_filename_characters("a#b@c.txt", "@#!") == ["#", "@"]


def test_filename_component_handles_both_separators():
    assert filename_component("C:\\dir\\file.txt") == "file.txt"
    assert filename_component("/tmp/dir/file.txt") == "file.txt"
