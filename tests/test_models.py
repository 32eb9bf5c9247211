import pytest

from gwtxml_generator.models import SearchFilter, module_names, package_of, to_module_name


def test_to_module_name_strips_suffix() -> None:
    assert to_module_name("a/b/c.gwt.xml") == "a.b.c"
    resource = "org/eclipse/che/ide/Api.gwt.xml"
    assert len(to_module_name(resource)) == len(resource) - len(".gwt.xml")


def test_to_module_name_rejects_foreign_suffix() -> None:
    with pytest.raises(ValueError):
        to_module_name("a/b/c.xml")


def test_module_names_collapse_duplicates() -> None:
    names = module_names(["a/b/C.gwt.xml", "a/b/C.gwt.xml", "d/E.gwt.xml"])
    assert names == {"a.b.C", "d.E"}


def test_package_of_uses_directory_component() -> None:
    assert package_of("a/b/c.gwt.xml") == "a.b"
    assert package_of("Root.gwt.xml") == ""


def test_empty_include_accepts_everything_not_excluded() -> None:
    search_filter = SearchFilter.build(exclude=["com.google"])
    assert search_filter.accepts("org.eclipse.che")
    assert search_filter.accepts("")
    assert not search_filter.accepts("com.google.gwt.user")


def test_exclude_wins_over_include() -> None:
    search_filter = SearchFilter.build(include=["org.eclipse"], exclude=["org.eclipse.che.plugin"])
    assert search_filter.accepts("org.eclipse.che.ide")
    assert not search_filter.accepts("org.eclipse.che.plugin.maven")
    assert not search_filter.accepts("com.example")


def test_exclude_broader_than_include_still_wins() -> None:
    search_filter = SearchFilter.build(include=["org.eclipse.che.ide"], exclude=["org.eclipse"])
    assert not search_filter.accepts("org.eclipse.che.ide")


def test_prefix_matching_is_plain_string_prefix() -> None:
    search_filter = SearchFilter.build(exclude=["com.google", "java.util"])
    assert not search_filter.accepts("com.google")
    assert not search_filter.accepts("com.googlecode.gwtquery")
    assert not search_filter.accepts("java.utils")
    assert search_filter.accepts("com.example")


def test_trailing_dot_limits_rule_to_sub_packages() -> None:
    search_filter = SearchFilter.build(exclude=["com.google."])
    assert search_filter.accepts("com.google")
    assert search_filter.accepts("com.googlecode")
    assert not search_filter.accepts("com.google.gwt.user")


def test_blank_rules_are_ignored() -> None:
    search_filter = SearchFilter.build(include=["", "  "], exclude=[""])
    assert search_filter.include_packages == frozenset()
    assert search_filter.accepts("anything.at.all")
