"""Lockfile and manifest parsers for various ecosystems."""

from .cabal_freeze import CabalFreezeParser
from .cargo_lock import CargoLockParser
from .cargo_toml import CargoTomlParser
from .composer_lock import ComposerLockParser
from .conan_lock import ConanLockParser
from .dockerfile import DockerfileParser
from .flake_lock import NixFlakeLockParser
from .gemfile_lock import GemfileLockParser
from .go_mod import GoModParser
from .go_sum import GoSumParser
from .gradle_lock import GradleLockParser
from .julia_manifest import JuliaManifestParser
from .mix_lock import MixLockParser
from .nuget_lock import NuGetLockParser
from .package_lock import PackageLockParser
from .pipfile_lock import PipfileLockParser
from .pnpm_lock import PnpmLockParser
from .poetry_lock import PoetryLockParser
from .pom_xml import PomXmlParser
from .pubspec_lock import PubspecLockParser
from .pyproject_toml import PyprojectTomlParser
from .rebar_lock import RebarLockParser
from .renv_lock import RenvLockParser
from .requirements_txt import RequirementsTxtParser
from .stack_lock import StackLockParser
from .swift_resolved import SwiftPackageResolvedParser
from .terraform_lock import TerraformLockParser
from .vcpkg_json import VcpkgJsonParser
from .yarn_lock import YarnLockParser

__all__ = [
    "CabalFreezeParser",
    "CargoLockParser",
    "CargoTomlParser",
    "ComposerLockParser",
    "ConanLockParser",
    "DockerfileParser",
    "GemfileLockParser",
    "GoModParser",
    "GoSumParser",
    "GradleLockParser",
    "JuliaManifestParser",
    "MixLockParser",
    "NixFlakeLockParser",
    "NuGetLockParser",
    "PackageLockParser",
    "PipfileLockParser",
    "PnpmLockParser",
    "PoetryLockParser",
    "PomXmlParser",
    "PubspecLockParser",
    "PyprojectTomlParser",
    "RebarLockParser",
    "RenvLockParser",
    "RequirementsTxtParser",
    "StackLockParser",
    "SwiftPackageResolvedParser",
    "TerraformLockParser",
    "VcpkgJsonParser",
    "YarnLockParser",
]
