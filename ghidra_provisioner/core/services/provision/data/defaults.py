"""
L0 Data — Built-in provisioning defaults.

Pure data. No logic. No imports beyond stdlib.
Every value here can be overridden from ``provision.yml``.
"""

from __future__ import annotations

# ── Release ─────────────────────────────────────────────────────

GHIDRA_VERSION = "11.2.1"
GHIDRA_BUILD_DATE = "20241105"
GHIDRA_URL_TEMPLATE = (
    "https://github.com/NationalSecurityAgency/ghidra/releases/download/"
    "Ghidra_{version}_build/ghidra_{version}_PUBLIC_{build_date}.zip"
)

# ── Paths ───────────────────────────────────────────────────────

INSTALL_DIR = "/opt/ghidra"
TEMP_DIR = "/tmp"
ARCHIVE_NAME = "ghidra.zip"
BIN_DIR = "/usr/local/bin"
LAUNCHER = "support/analyzeHeadless"
LINK_NAMES = ["ghidra-headless", "analyzeHeadless"]

# ── Runtime ─────────────────────────────────────────────────────

JAVA_MIN_VERSION = 21

# ── Secondary package (ThingFinder) ─────────────────────────────

THINGFINDER_REPO = "https://github.com/user1342/ThingFinder.git"
THINGFINDER_DIR = "/opt/ThingFinder"
REQUIREMENTS_FILE = "requirements.txt"

# Kept for the optional python-package step (disabled by default).
PYTHON_PACKAGES = ["psutil", "protobuf==3.20.3"]

# ── Package managers ────────────────────────────────────────────

# Probe order.  First hit wins.
PACKAGE_MANAGER_PRIORITY = ("apt-get", "dnf", "yum")

# Only installed by the extended variant.
EXTENDED_ONLY_PACKAGES = ["python3", "python3-pip", "git"]

PACKAGE_SETS: dict[str, dict] = {
    "apt-get": {
        "update": ["apt-get", "update"],
        "install": ["apt-get", "install", "-y"],
        "packages": ["wget", "unzip", "python3", "python3-pip", "curl", "git"],
        "runtime": "openjdk-{java}-jdk",
        "separate_runtime": True,
    },
    "dnf": {
        "update": ["dnf", "update", "-y"],
        "install": ["dnf", "install", "-y"],
        "packages": ["wget", "unzip", "python3", "python3-pip", "curl", "git"],
        "runtime": "java-{java}-openjdk-devel",
        "separate_runtime": False,
    },
    "yum": {
        "update": ["yum", "update", "-y"],
        "install": ["yum", "install", "-y"],
        "packages": ["wget", "unzip", "python3", "python3-pip", "curl", "git"],
        "runtime": "java-{java}-openjdk-devel",
        "separate_runtime": False,
    },
}
