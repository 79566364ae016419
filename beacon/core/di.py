from __future__ import annotations

__all__ = [
    "Container",
    "NotReady",
    "Provide",
    "Provider",
    "containers",
    "inject",
    "providers",
    "register_loader_containers",
    "unregister_loader_containers",
]

import importlib.machinery
import sys
import types
import typing as t

import dependency_injector.containers as containers
import dependency_injector.providers as providers
from dependency_injector.containers import Container
from dependency_injector.providers import Provider
from dependency_injector.wiring import inject, Provide

from beacon.lib import NotReady


class WiringLoader(object):
    """
    Import hook which wires each freshly executed module into the containers
    registered for the package it belongs to. Containers registered without a
    package are wired into every module.
    """

    containers: dict[str | None, list[Container]]
    _path_hook: t.Callable[[str], t.Any] | None = None

    def __init__(self) -> None:
        self.containers = {}

    def register(self, *containers: Container, packages: t.Sequence[str] | None) -> None:
        for pkg in packages or [None]:
            self.containers.setdefault(pkg, []).extend(containers)
        self.install()

    def unregister(self, *containers: Container) -> None:
        for registered in self.containers.values():
            registered[:] = [c for c in registered if c not in containers]

        if not any(self.containers.values()):
            self.uninstall()

    def wire(self, module: types.ModuleType) -> None:
        for package, registered in self.containers.items():
            if package is None or module.__name__.startswith(package):
                for container in registered:
                    container.wire(modules=[module])

    def _wiring(self, base: type[importlib.machinery.SourceFileLoader | importlib.machinery.SourcelessFileLoader]):
        hook = self

        class Loader(base):  # pyright: ignore [reportGeneralTypeIssues]
            def exec_module(self, module: types.ModuleType) -> None:
                super().exec_module(module)
                hook.wire(module)

        return Loader

    @property
    def installed(self) -> bool:
        return self._path_hook in sys.path_hooks

    def install(self) -> None:
        if self.installed:
            return

        self._path_hook = importlib.machinery.FileFinder.path_hook(
            (importlib.machinery.ExtensionFileLoader, importlib.machinery.EXTENSION_SUFFIXES),
            (self._wiring(importlib.machinery.SourceFileLoader), importlib.machinery.SOURCE_SUFFIXES),
            (self._wiring(importlib.machinery.SourcelessFileLoader), importlib.machinery.BYTECODE_SUFFIXES),
        )
        sys.path_hooks.insert(0, self._path_hook)
        sys.path_importer_cache.clear()

    def uninstall(self) -> None:
        if not self.installed:
            return

        sys.path_hooks.remove(self._path_hook)
        sys.path_importer_cache.clear()


_loader = WiringLoader()


def register_loader_containers(*containers: Container, packages: t.Sequence[str] | None = None) -> None:
    """Wire containers into modules of `packages` as they are imported."""
    _loader.register(*containers, packages=packages)


def unregister_loader_containers(*containers: Container) -> None:
    _loader.unregister(*containers)
