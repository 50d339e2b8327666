"""Tests for the default strategy registry."""

import pytest

from dpkg_licenses.resolvers import (
    CommandResolver,
    CommonLicensesResolver,
    CopyrightFileResolver,
    Dep5Resolver,
    LicenseTextResolver,
    build_chain,
    default_strategies,
)


def test_default_order():
    """Test that built-in strategies come in their fixed priority order."""
    strategies = default_strategies()

    assert [type(s) for s in strategies] == [
        Dep5Resolver,
        CommonLicensesResolver,
        LicenseTextResolver,
    ]


def test_plugins_follow_builtins_in_given_order(tmp_path):
    """Test that plugins are appended in command-line order."""
    strategies = default_strategies(tmp_path, plugins=["/opt/zz-reader", "/opt/aa-reader"])

    assert isinstance(strategies[-1], CommandResolver)
    assert [s.name for s in strategies[-2:]] == ["zz-reader", "aa-reader"]
    assert all(s.doc_root == tmp_path for s in strategies[:3])


def test_build_chain(tmp_path):
    """Test that build_chain wires timeout and order."""
    chain = build_chain(tmp_path, timeout=5)

    assert chain.timeout == 5
    assert [d.identifier for d in chain.describe()] == [
        "dep5",
        "common-licenses",
        "license-text",
    ]


@pytest.mark.asyncio
async def test_default_chain_end_to_end(populated_doc_root):
    """Test each built-in strategy winning for its kind of copyright file."""
    chain = build_chain(populated_doc_root)

    foo, bar, baz, qux = [
        await chain.resolve(name) for name in ["foo", "bar", "baz", "qux"]
    ]

    assert (foo.normalized_license, foo.resolved_by) == ("MIT", "dep5")
    assert (bar.normalized_license, bar.resolved_by) == ("GPL-2", "common-licenses")
    assert (baz.normalized_license, baz.resolved_by) == ("MIT", "license-text")
    assert (qux.normalized_license, qux.resolved_by) == ("unknown", None)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "Copyright 2004 Example Authors\n\n"
            "This program is free software; you can redistribute it and/or modify\n"
            "it under the terms of the GNU General Public License as published by\n"
            "the Free Software Foundation; either version 2 of the License, or\n"
            "(at your option) any later version.\n",
            "GPL-2.0-or-later",
        ),
        ("Copyright 2004 Example Authors, licensed under GPL-2+.\n", "GPL-2.0-or-later"),
    ],
)
async def test_default_chain_gpl_notices(doc_root, write_copyright, text, expected):
    """Test free-form GPL wording resolved by the license-text strategy."""
    write_copyright("gplpkg", text)

    result = await build_chain(doc_root).resolve("gplpkg")

    assert (result.normalized_license, result.resolved_by) == (expected, "license-text")


@pytest.mark.asyncio
async def test_each_builtin_strategy_reads_copyright_itself(mocker, doc_root, write_copyright):
    """Test that an unresolvable package is read once per built-in strategy."""
    write_copyright("plain", "Copyright 2001 Nobody. All rights reserved.\n")
    read_copyright = mocker.spy(CopyrightFileResolver, "read_copyright")

    result = await build_chain(doc_root).resolve("plain")

    assert result.is_unknown
    assert read_copyright.call_count == 3
