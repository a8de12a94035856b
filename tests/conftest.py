"""Shared test fixtures — sample diffs, stats, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from difftree.git.models import ChangeKind
from difftree.stats.models import FileStat


@pytest.fixture
def make_stat() -> Callable[..., FileStat]:
    """Build a FileStat whose id defaults to its path."""

    def _make(path: str, add: int = 0, delete: int = 0, change=ChangeKind.MODIFIED, id=None) -> FileStat:
        return FileStat(id=id or path, path=path, change=change, add=add, delete=delete)

    return _make


@pytest.fixture
def sample_diff_modified() -> str:
    """Two modified files in one directory."""
    return textwrap.dedent("""\
        diff --git a/src/a.ts b/src/a.ts
        index 1234567..abcdef0 100644
        --- a/src/a.ts
        +++ b/src/a.ts
        @@ -1,3 +1,4 @@
         import x from "x";
        -const a = 1;
        +const a = 2;
        +const b = 3;
         export default a;
        diff --git a/src/b.ts b/src/b.ts
        index 1234567..abcdef0 100644
        --- a/src/b.ts
        +++ b/src/b.ts
        @@ -10,0 +11,2 @@
        +// one
        +// two
    """)


@pytest.fixture
def sample_diff_added() -> str:
    """A new file."""
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/hello.py
        @@ -0,0 +1,3 @@
        +def greet(name):
        +    return f"Hello, {name}!"
        +
    """)


@pytest.fixture
def sample_diff_deleted() -> str:
    """A deleted file."""
    return textwrap.dedent("""\
        diff --git a/old.py b/old.py
        deleted file mode 100644
        index abc1234..0000000
        --- a/old.py
        +++ /dev/null
        @@ -1,3 +0,0 @@
        -line one
        -line two
        -line three
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    """A diff with a binary file."""
    return textwrap.dedent("""\
        diff --git a/image.png b/image.png
        new file mode 100644
        index 0000000..abc1234
        Binary files /dev/null and b/image.png differ
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A diff with a renamed file."""
    return textwrap.dedent("""\
        diff --git a/old_name.py b/pkg/new_name.py
        similarity index 97%
        rename from old_name.py
        rename to pkg/new_name.py
        index abc1234..def5678 100644
        --- a/old_name.py
        +++ b/pkg/new_name.py
        @@ -1,1 +1,2 @@
         x = 1
        +# New line added after rename
    """)


@pytest.fixture
def sample_diff_copy() -> str:
    """A diff with a copied file and no content change."""
    return textwrap.dedent("""\
        diff --git a/base.cfg b/copy.cfg
        similarity index 100%
        copy from base.cfg
        copy to copy.cfg
    """)


@pytest.fixture
def sample_diff_mode_only() -> str:
    """A diff with only file mode change."""
    return textwrap.dedent("""\
        diff --git a/script.sh b/script.sh
        old mode 100644
        new mode 100755
    """)


@pytest.fixture
def sample_diff_submodule() -> str:
    """A diff with submodule pointer change."""
    return textwrap.dedent("""\
        diff --git a/vendor/lib b/vendor/lib
        index abc1234..def5678 160000
        --- a/vendor/lib
        +++ b/vendor/lib
        @@ -1 +1 @@
        -Subproject commit abc1234567890abcdef1234567890abcdef123456
        +Subproject commit def4567890abcdef1234567890abcdef123456ab
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    """A diff with 'No newline at end of file' markers."""
    return textwrap.dedent("""\
        diff --git a/data.txt b/data.txt
        index abc1234..def5678 100644
        --- a/data.txt
        +++ b/data.txt
        @@ -1 +1 @@
        -final line
        \\ No newline at end of file
        +final line changed
        \\ No newline at end of file
    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    # Initial commit
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
