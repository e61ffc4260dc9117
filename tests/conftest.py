"""Shared fixtures for search index tests."""

from pathlib import Path

import pytest

GUIDE_FRONT_MATTER = """---
title: Auth Overview
description: How authentication works
---

# Overview

Supabase Auth handles sign in and session management.
"""

GUIDE_INLINE_META = """import Layout from '~/layouts/DefaultGuideLayout'

export const meta = {
  id: 'row-level-security',
  title: 'Row Level Security',
  description: 'Secure your data with policies',
}

Row level security policies protect tables.

export const Page = ({ children }) => <Layout meta={meta} children={children} />

export default Page
"""

REFERENCE_SIGN_UP = """---
id: sign-up
title: signUp
description: Creates a new user
---

Creates a new user account.
"""

REFERENCE_AUTH_INTRO = """---
id: auth-intro
title: Auth Server
---

The Auth server issues tokens.
"""

REFERENCE_SELECT = """---
id: select
title: select()
---

Performs vertical filtering with select.
"""


def write(root: Path, relative: str, content: str) -> Path:
    """Write a file below root, creating parent directories.

    Args:
        root: Base directory.
        relative: Path of the file relative to root.
        content: Text to write.

    Returns:
        Path to the written file.
    """
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def docs_tree(tmp_path: Path) -> Path:
    """Create a small documentation tree with guide and reference pages.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Directory containing "pages" and "docs" roots.
    """
    write(tmp_path, "pages/guides/auth/overview.mdx", GUIDE_FRONT_MATTER)
    write(tmp_path, "pages/guides/database/row-level-security.mdx", GUIDE_INLINE_META)
    write(tmp_path, "pages/guides/index.mdx", "---\ntitle: Guides\n---\n")
    write(tmp_path, "pages/404.mdx", "---\ntitle: Not Found\n---\n")

    write(tmp_path, "docs/reference/auth/v1/signUp.mdx", REFERENCE_SIGN_UP)
    write(tmp_path, "docs/reference/auth/v1/introduction.mdx", REFERENCE_AUTH_INTRO)
    write(tmp_path, "docs/reference/javascript/generated/select.mdx", REFERENCE_SELECT)
    write(tmp_path, "docs/reference/javascript/generated/index.mdx", "---\ntitle: Index\n---\n")
    write(tmp_path, "docs/reference/cli/.gitkeep", "")
    return tmp_path
