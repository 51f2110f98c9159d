"""Unit tests for route resolution and the sidebar"""

import pytest

from campus_dashboard.domain.navigation import (
    NAV_SECTIONS,
    ROUTE_TITLES,
    login_redirect,
    post_login_redirect,
    resolve_route,
)


def test_protected_page_title_when_authenticated():
    route = resolve_route("/stock/products", authenticated=True)

    assert route.found is True
    assert route.title == "Product Catalogue"
    assert route.redirect_to is None


def test_protected_page_redirects_to_login():
    route = resolve_route("/stock/products", authenticated=False)

    assert route.redirect_to == "/login?next=/stock/products"


@pytest.mark.parametrize("authenticated,expected", [(True, "/dashboard"), (False, "/login?next=/")])
def test_root_redirect(authenticated, expected):
    assert resolve_route("/", authenticated).redirect_to == expected


def test_unknown_path_is_not_found():
    route = resolve_route("/library/shelves", authenticated=True)

    assert route.found is False
    assert route.title == "Not found"
    assert route.redirect_to is None


def test_login_page_is_public():
    route = resolve_route("/login", authenticated=False)
    assert route.title == "Login"
    assert route.redirect_to is None


def test_trailing_slash_is_normalized():
    assert resolve_route("/students/", authenticated=True).title == "Student Overview"


def test_login_redirect_quotes_continuation():
    assert login_redirect("/students?tab=a b") == "/login?next=/students%3Ftab%3Da%20b"


def test_every_sidebar_link_has_a_title():
    links = [section.to for section in NAV_SECTIONS if section.to]
    links += [item.to for section in NAV_SECTIONS for item in section.items]

    assert len(links) == len(ROUTE_TITLES)
    assert all(link in ROUTE_TITLES for link in links)


@pytest.mark.parametrize(
    "next_path,expected",
    [
        ("/stock/pos", "/stock/pos"),
        ("%2Fstudents%2Fgraduated", "/students/graduated"),
        ("/employees?tab=all", "/employees"),
        ("/login", "/dashboard"),
        ("https://elsewhere.example/", "/dashboard"),
        ("", "/dashboard"),
        (None, "/dashboard"),
    ],
)
def test_post_login_redirect(next_path, expected):
    assert post_login_redirect(next_path) == expected
