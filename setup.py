from pathlib import Path
from setuptools import setup, find_packages

BASE_DIR = Path(__file__).parent

# ----------------------------------------------------------------------
# Core version & requirements (the library itself)
# ----------------------------------------------------------------------
version = (BASE_DIR / ".version").read_text().strip()
long_description = (BASE_DIR / "README.md").read_text(encoding="utf-8")
requirements_lib = [
    _r.strip()
    for _r in (BASE_DIR / "requirements_lib.txt").read_text().splitlines()
    if _r.strip() and not _r.startswith("#")
]

# ----------------------------------------------------------------------
# Extras handling
# ----------------------------------------------------------------------
extras = {
    "test": ["pytest"],
}

# ----------------------------------------------------------------------
setup(
    name="ai-services-lib",
    version=version,
    description="Typed REST call builder and codec for cloud AI services",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    packages=find_packages(
        where=".",
        include=["ai_services_lib*"],
        exclude=("tests", "docs"),
    ),
    python_requires=">=3.10",
    install_requires=requirements_lib,
    extras_require=extras,
)
