"""Tests for source resolution."""

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from reqaz.core.source import SourceResolver
from reqaz.core.types import Invalid, Valid

from tests.conftest import write_file

BASE_URL = "http://localhost:5000"

INDEX_WITH_IMPORT = """<!DOCTYPE html>
<html>
<head>
<title>Home</title>
<nib-import href="style.css"></nib-import>
</head>
<body><h1>Home</h1></body>
</html>
"""


def _page_importing(*hrefs: str) -> str:
    imports = "".join(f'<nib-import href="{href}"></nib-import>' for href in hrefs)
    return f"<html><head>{imports}</head><body></body></html>"


class TestSourceResolverPages:
    """Tests for page and static resolution."""

    def test__root__imports_inlined(self, content_root: Path) -> None:
        """Resolve / to pages/index.html with its stylesheet inlined."""
        write_file(content_root, "pages/index.html", INDEX_WITH_IMPORT)
        write_file(content_root, "static/style.css", "a{color:red}")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/")

        assert isinstance(result, Valid)
        assert result.mime == "text/html"
        soup = BeautifulSoup(result.body, "html.parser")
        assert soup.find("nib-import") is None
        style = soup.find("style")
        assert style is not None
        assert style.string == "a{color:red}"

    def test__page_directory__preferred_over_static(self, content_root: Path) -> None:
        """Resolve /about to pages/about/index.html before static/about."""
        write_file(content_root, "pages/about/index.html", "<p>About page</p>")
        write_file(content_root, "static/about", "static about")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/about")

        assert isinstance(result, Valid)
        assert "About page" in result.body
        assert result.mime == "text/html"

    def test__static_only__returns_static(self, content_root: Path) -> None:
        """Resolve /about to static/about when no page exists."""
        write_file(content_root, "static/about", "static about")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/about")

        assert result == Valid(body="static about", mime=None)

    def test__static_css__returned_verbatim(self, content_root: Path) -> None:
        """Serve non-HTML files without expansion."""
        css = "nib-import{display:none}"
        write_file(content_root, "static/site.css", css)
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/site.css")

        assert result == Valid(body=css, mime="text/css")

    def test__static_html__expanded(self, content_root: Path) -> None:
        """Expand HTML files served from static/ too."""
        write_file(content_root, "static/raw.html", _page_importing("/style.css"))
        write_file(content_root, "static/style.css", "b{}")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/raw.html")

        assert isinstance(result, Valid)
        assert "<style>b{}</style>" in result.body

    def test__query_string__ignored(self, content_root: Path) -> None:
        """Use only the path component of the URL."""
        write_file(content_root, "static/site.css", "s{}")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/site.css?v=3#x")

        assert result == Valid(body="s{}", mime="text/css")

    def test__missing__returns_404(self, content_root: Path) -> None:
        """Return 404 when nothing exists at the path."""
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/nope") == Invalid(status=404)

    def test__missing_root_index__returns_404(self, content_root: Path) -> None:
        """Return 404 for / when pages/index.html is missing."""
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/") == Invalid(status=404)

    def test__directory__returns_404(self, content_root: Path) -> None:
        """Return 404 for static directories."""
        (content_root / "static" / "img").mkdir()
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/img") == Invalid(status=404)

    def test__undecodable_file__returns_500(self, content_root: Path) -> None:
        """Return 500 when the file cannot be read as text."""
        (content_root / "static" / "blob.bin").write_bytes(b"\xff\xfe\xfa")
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/blob.bin") == Invalid(status=500)

    def test__traversal__cannot_escape_root(
        self, tmp_path: Path, content_root: Path
    ) -> None:
        """Keep dot-segment paths inside the content root."""
        (tmp_path / "secret.txt").write_text("secret")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/%2e%2e/%2e%2e/secret.txt")

        assert result == Invalid(status=404)

    def test__malformed_url__returns_404(self, content_root: Path) -> None:
        """Return 404 for URLs that cannot be parsed."""
        resolver = SourceResolver(content_root)

        assert resolver.resolve("http://[::1/index.html") == Invalid(status=404)

    def test__root__returns_path(self, content_root: Path) -> None:
        """Return content root from property."""
        assert SourceResolver(content_root).root == content_root


class TestSourceResolverImports:
    """Tests for import directive failures and nesting."""

    def test__missing_href__returns_500(self, content_root: Path) -> None:
        """Return 500 when a directive has no href."""
        write_file(
            content_root,
            "pages/index.html",
            "<html><head><nib-import></nib-import></head></html>",
        )
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/") == Invalid(status=500)

    def test__missing_import__returns_404(self, content_root: Path) -> None:
        """Return 404 when an imported file does not exist."""
        write_file(content_root, "pages/index.html", _page_importing("missing.css"))
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/") == Invalid(status=404)

    def test__unsupported_import__returns_500(self, content_root: Path) -> None:
        """Return 500 for non-CSS import targets."""
        write_file(content_root, "pages/index.html", _page_importing("x.svg"))
        write_file(content_root, "static/x.svg", "<svg></svg>")
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/") == Invalid(status=500)

    def test__unreadable_import__returns_500(self, content_root: Path) -> None:
        """Return 500 when an imported file cannot be read."""
        write_file(content_root, "pages/index.html", _page_importing("bad.css"))
        (content_root / "static" / "bad.css").write_bytes(b"\xff\xfe")
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/") == Invalid(status=500)

    def test__second_import_missing__no_partial_output(self, content_root: Path) -> None:
        """Fail the whole document when any import fails."""
        write_file(
            content_root, "pages/index.html", _page_importing("a.css", "missing.css")
        )
        write_file(content_root, "static/a.css", "a{}")
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/") == Invalid(status=404)

    def test__nested_page__relative_import(self, content_root: Path) -> None:
        """Resolve relative imports against the page URL."""
        write_file(content_root, "pages/docs/index.html", _page_importing("theme.css"))
        write_file(content_root, "static/docs/theme.css", "t{}")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/docs/")

        assert isinstance(result, Valid)
        assert "<style>t{}</style>" in result.body

    @pytest.mark.parametrize("path", ["/about", "/about/"])
    def test__page_without_trailing_slash__same_relative_import(
        self, content_root: Path, path: str
    ) -> None:
        """Resolve relative imports beneath the page path either way."""
        write_file(content_root, "pages/about/index.html", _page_importing("style.css"))
        write_file(content_root, "static/about/style.css", "about{}")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}{path}")

        assert isinstance(result, Valid)
        assert "<style>about{}</style>" in result.body

    def test__unclosed_imports__all_inlined(self, content_root: Path) -> None:
        """Expand unclosed import directives instead of failing."""
        write_file(
            content_root,
            "pages/index.html",
            '<html><head><nib-import href="a.css"><nib-import href="b.css">'
            "</head><body></body></html>",
        )
        write_file(content_root, "static/a.css", "a{}")
        write_file(content_root, "static/b.css", "b{}")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/")

        assert isinstance(result, Valid)
        soup = BeautifulSoup(result.body, "html.parser")
        assert [s.string for s in soup.find_all("style")] == ["a{}", "b{}"]
        assert soup.find("nib-import") is None

    def test__import_resolving_to_page__expanded_recursively(
        self, content_root: Path
    ) -> None:
        """Expand imports of imported HTML pages before inlining them."""
        write_file(content_root, "pages/index.html", _page_importing("/theme.css"))
        write_file(
            content_root, "pages/theme.css/index.html", _page_importing("/base.css")
        )
        write_file(content_root, "static/base.css", "base{}")
        resolver = SourceResolver(content_root)

        result = resolver.resolve(f"{BASE_URL}/")

        assert isinstance(result, Valid)
        assert "base{}" in result.body
        assert "nib-import" not in result.body

    def test__self_import__returns_500(self, content_root: Path) -> None:
        """Fail documents that import themselves."""
        write_file(content_root, "pages/loop.css/index.html", _page_importing("/loop.css"))
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/loop.css") == Invalid(status=500)

    def test__mutual_imports__returns_500(self, content_root: Path) -> None:
        """Fail documents that import each other."""
        write_file(content_root, "pages/a.css/index.html", _page_importing("/b.css"))
        write_file(content_root, "pages/b.css/index.html", _page_importing("/a.css"))
        write_file(content_root, "pages/index.html", _page_importing("/a.css"))
        resolver = SourceResolver(content_root)

        assert resolver.resolve(f"{BASE_URL}/") == Invalid(status=500)

    def test__depth_limit__returns_500(self, content_root: Path) -> None:
        """Fail chains deeper than max_include_depth."""
        write_file(content_root, "pages/index.html", _page_importing("/l1.css"))
        write_file(content_root, "pages/l1.css/index.html", _page_importing("/l2.css"))
        write_file(content_root, "pages/l2.css/index.html", _page_importing("/l3.css"))
        write_file(content_root, "static/l3.css", "deep{}")

        assert isinstance(SourceResolver(content_root).resolve(f"{BASE_URL}/"), Valid)
        shallow = SourceResolver(content_root, max_include_depth=2)
        assert shallow.resolve(f"{BASE_URL}/") == Invalid(status=500)


class TestSourceResolverProperties:
    """Tests for general resolution guarantees."""

    def test__repeated_resolution__identical(self, content_root: Path) -> None:
        """Return byte-identical bodies for repeated resolutions."""
        write_file(content_root, "pages/index.html", INDEX_WITH_IMPORT)
        write_file(content_root, "static/style.css", "a{color:red}")
        resolver = SourceResolver(content_root)

        first = resolver.resolve(f"{BASE_URL}/")
        second = resolver.resolve(f"{BASE_URL}/")

        assert isinstance(first, Valid)
        assert first == second

    def test__independent_roots__do_not_interfere(self, tmp_path: Path) -> None:
        """Keep resolvers with different roots independent."""
        write_file(tmp_path / "one", "static/x.txt", "one")
        write_file(tmp_path / "two", "static/x.txt", "two")

        one = SourceResolver(tmp_path / "one")
        two = SourceResolver(tmp_path / "two")

        assert one.resolve(f"{BASE_URL}/x.txt") == Valid(body="one", mime="text/plain")
        assert two.resolve(f"{BASE_URL}/x.txt") == Valid(body="two", mime="text/plain")

    @pytest.mark.parametrize(
        "url",
        [
            f"{BASE_URL}/",
            f"{BASE_URL}/%00",
            f"{BASE_URL}/a/b/c/../../../..",
            f"{BASE_URL}//",
            f"{BASE_URL}/%ff%fe",
            f"{BASE_URL}/" + "a" * 300,
            f"{BASE_URL}/" + "a" * 300 + "/b.css",
            "not a url",
            "",
        ],
    )
    def test__any_url__returns_result(self, content_root: Path, url: str) -> None:
        """Return Valid or Invalid for any input without raising."""
        resolver = SourceResolver(content_root)

        assert isinstance(resolver.resolve(url), Valid | Invalid)
