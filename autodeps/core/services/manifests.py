"""
Manifest registry — which files trigger which install command.

Maps a dependency filename to its descriptor. The table is fixed at
import time; ``lookup`` is a pure dictionary read.

Python projects also get a virtual-environment path: when a directory
holds a requirements list, the walker creates ``.venv`` if missing and
installs through it instead of the bare ``pip`` entry below.
"""

from __future__ import annotations

from autodeps.core.models.manifest import Category, ManifestDescriptor

# ── Registry ────────────────────────────────────────────────────


_MANIFESTS: tuple[ManifestDescriptor, ...] = (
    ManifestDescriptor(
        filename="go.mod",
        label="Go",
        command=("go", "mod", "download"),
        category=Category.GO,
    ),
    ManifestDescriptor(
        filename="package.json",
        label="NPM",
        command=("npm", "install"),
        category=Category.NPM,
    ),
    ManifestDescriptor(
        filename="pnpm-lock.yaml",
        label="PNPM",
        command=("pnpm", "install"),
        category=Category.PNPM,
    ),
    ManifestDescriptor(
        filename="yarn.lock",
        label="Yarn",
        command=("yarn", "install"),
        category=Category.YARN,
    ),
    ManifestDescriptor(
        filename="requirements.txt",
        label="Python (pip)",
        command=("pip", "install", "-r", "requirements.txt"),
        category=Category.PIP,
    ),
    ManifestDescriptor(
        filename="Pipfile",
        label="Pipenv",
        command=("pipenv", "install"),
        category=Category.PIPENV,
    ),
    ManifestDescriptor(
        filename="environment.yml",
        label="Conda",
        command=("conda", "env", "update", "--file", "environment.yml"),
        category=Category.CONDA,
    ),
)

MANIFESTS: dict[str, ManifestDescriptor] = {m.filename: m for m in _MANIFESTS}


def lookup(filename: str) -> ManifestDescriptor | None:
    """Return the descriptor for ``filename``, or None if unrecognised."""
    return MANIFESTS.get(filename)


# ── Python virtual environment ──────────────────────────────────


VENV_MARKER = ".venv"
VENV_BIN = f"{VENV_MARKER}/bin"
REQUIREMENTS_FILE = "requirements.txt"

VENV_CREATE_LABEL = "Python (venv)"
VENV_INSTALL_LABEL = "Python (pip)"
VENV_INSTALL_REQUIRES = ("pip",)


def venv_create_command() -> list[str]:
    """Command that creates the virtual environment in the cwd."""
    return ["python3", "-m", "venv", VENV_MARKER]


def venv_install_command() -> list[str]:
    """Composite command: activate the environment, then pip install.

    Activation only makes sense inside a shell, so this goes through
    ``sh -c``.
    """
    script = f". {VENV_BIN}/activate && pip install -r {REQUIREMENTS_FILE}"
    return ["sh", "-c", script]
