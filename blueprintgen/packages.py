"""Package mutation gateway and the convenience helpers hooks call.

The engine never edits ``package.json`` itself.  Hooks ask for packages to be
added or removed; the helpers here announce the request through the UI and
forward it to a :class:`PackageGateway`.  :class:`CommandPackageGateway`
shells out to npm/bower; tests substitute a recording fake.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional, Protocol, Union

from .errors import UsageError
from .models import BowerPackage, PackageDescriptor
from .project import Project
from .utils import run_command

if TYPE_CHECKING:
    from .context import InstallContext

logger = logging.getLogger(__name__)

PackageLike = Union[PackageDescriptor, dict, str]


class PackageGateway(Protocol):
    """What the engine needs from a package manager."""

    async def add_packages(self, packages: list[PackageDescriptor], dev: bool = True) -> None: ...

    async def remove_packages(self, packages: list[PackageDescriptor], dev: bool = True) -> None: ...

    async def add_bower_packages(self, packages: list[BowerPackage]) -> None: ...

    async def add_addons(self, packages: list[str]) -> None: ...


class PackageCommandError(Exception):
    """A package manager command exited non-zero."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"`{' '.join(cmd)}` exited with status {returncode}: {stderr or 'no output'}"
        )


# ---------------------------------------------------------------------------
# Command-line gateway
# ---------------------------------------------------------------------------

class CommandPackageGateway:
    """Runs npm and bower in the project root.

    Packages are always saved as dev dependencies, and the project's cached
    ``package.json`` is dropped afterwards so later hooks see the change.
    """

    def __init__(self, project: Project) -> None:
        self.project = project
        self.config = project.config

    async def add_packages(self, packages: list[PackageDescriptor], dev: bool = True) -> None:
        flag = "--save-dev" if dev else "--save"
        await self._run([self.config.npm_command, "install", flag, *(p.spec() for p in packages)])

    async def remove_packages(self, packages: list[PackageDescriptor], dev: bool = True) -> None:
        flag = "--save-dev" if dev else "--save"
        await self._run([self.config.npm_command, "uninstall", flag, *(p.name for p in packages)])

    async def add_bower_packages(self, packages: list[BowerPackage]) -> None:
        await self._run([self.config.bower_command, "install", "--save", *(p.spec() for p in packages)])

    async def add_addons(self, packages: list[str]) -> None:
        await self._run([self.config.npm_command, "install", "--save-dev", *packages])

    async def _run(self, cmd: list[str]) -> None:
        logger.info("Running %s", " ".join(cmd))
        rc, stdout, stderr = await run_command(
            cmd, cwd=self.project.root, timeout=self.config.command_timeout
        )
        if stdout:
            logger.debug(stdout)
        if rc != 0:
            raise PackageCommandError(cmd, rc, stderr)
        self.project.reload()


# ---------------------------------------------------------------------------
# Descriptor parsing
# ---------------------------------------------------------------------------

def to_descriptor(package: PackageLike) -> PackageDescriptor:
    if isinstance(package, PackageDescriptor):
        return package
    if isinstance(package, dict):
        return PackageDescriptor(**package)
    return PackageDescriptor(name=package)


def parse_bower_endpoint(name: str, target: Optional[str] = None) -> BowerPackage:
    """Decompose a bower ``name``/``target`` pair.

    ``target`` is either a version range, a ``source#version`` endpoint or a
    bare URL (fetched at ``*``).  A single ``source#version`` argument is
    accepted for compatibility and names the package after its source.
    """
    if "#" in name:
        if target is not None:
            raise UsageError(
                f"You cannot pass a Bower endpoint `{name}` along with a target `{target}`."
            )
        name, target = name.split("#", 1)

    if not target:
        return BowerPackage(name=name, source=name, target="*")
    if "#" in target:
        source, version = target.split("#", 1)
        return BowerPackage(name=name, source=source, target=version or "*")
    if "://" in target or "/" in target or target.endswith(".git"):
        return BowerPackage(name=name, source=target, target="*")
    return BowerPackage(name=name, source=name, target=target)


# ---------------------------------------------------------------------------
# Helpers for hooks
# ---------------------------------------------------------------------------

def _announce(context: "InstallContext", verb: str, noun: str, names: Iterable[str]) -> None:
    names = list(names)
    if context.ui is None:
        return
    plural = "s" if len(names) > 1 else ""
    context.ui.write_line(f"  {verb} {noun}{plural} {', '.join(names)}", style="green")


async def add_packages_to_project(
    context: "InstallContext", packages: Iterable[PackageLike], dev: bool = True
) -> None:
    descriptors = [to_descriptor(p) for p in packages]
    _announce(context, "install", "package", (d.name for d in descriptors))
    if context.packages is not None:
        await context.packages.add_packages(descriptors, dev=dev)


async def add_package_to_project(
    context: "InstallContext", name: str, target: Optional[str] = None
) -> None:
    await add_packages_to_project(context, [PackageDescriptor(name=name, target=target)])


async def remove_packages_from_project(
    context: "InstallContext", packages: Iterable[PackageLike], dev: bool = True
) -> None:
    descriptors = [to_descriptor(p) for p in packages]
    _announce(context, "uninstall", "package", (d.name for d in descriptors))
    if context.packages is not None:
        await context.packages.remove_packages(descriptors, dev=dev)


async def remove_package_from_project(context: "InstallContext", name: str) -> None:
    await remove_packages_from_project(context, [PackageDescriptor(name=name)])


async def add_bower_packages_to_project(
    context: "InstallContext", packages: Iterable[Union[BowerPackage, dict[str, Any]]]
) -> None:
    endpoints = [p if isinstance(p, BowerPackage) else BowerPackage(**p) for p in packages]
    _announce(context, "install", "bower package", (e.name or e.source for e in endpoints))
    if context.packages is not None:
        await context.packages.add_bower_packages(endpoints)


async def add_bower_package_to_project(
    context: "InstallContext", name: str, target: Optional[str] = None
) -> None:
    await add_bower_packages_to_project(context, [parse_bower_endpoint(name, target)])


async def add_addons_to_project(
    context: "InstallContext", packages: Iterable[PackageLike]
) -> None:
    specs = [to_descriptor(p).spec() for p in packages]
    _announce(context, "install", "addon", specs)
    if context.packages is not None:
        await context.packages.add_addons(specs)


async def add_addon_to_project(
    context: "InstallContext", name: str, target: Optional[str] = None
) -> None:
    await add_addons_to_project(context, [PackageDescriptor(name=name, target=target)])
