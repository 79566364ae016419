import functools
import getpass
import os
import typing as t
from pathlib import Path

import pydantic as p
import yaml
from ansible.parsing.vault import VaultLib, VaultSecret
from keyctl import Key as keyctl
from keyctl import KeyNotExistError
from pydantic_settings import PydanticBaseSettingsSource
from pydantic_settings.sources import SettingsError

import beacon.lib.util as util
from beacon.model import DeploymentEnvironment

VaultPasswordVariable = "BEACON_VAULT_PASSWORD"
SkipKeys = frozenset({"env", "root", "override"})


class CurrentState(t.TypedDict, total=False):
    root: t.Required[p.AnyUrl]
    env: t.Required[DeploymentEnvironment]


class SettingsCurrentState(CurrentState, total=False):
    override: t.Required[tuple[str, ...]]


def config_paths(root: p.AnyUrl, env: DeploymentEnvironment) -> list[Path]:
    """Directories consulted for configuration, least specific first."""
    assert root.scheme == "file" and root.path is not None, "root is not a legible location of YAML files"
    paths = [Path(root.path)]
    if env is not DeploymentEnvironment.Local:
        # local/ has no directory of its own, it is the root
        paths.append(Path(root.path) / "env.d" / env.value)
    return paths


class SettingsSource(PydanticBaseSettingsSource):
    def __call__(self) -> dict[str, t.Any]:
        # we expect init kwargs to have config root and env in them
        data: dict[str, t.Any] = {}

        for field_name, field in self.settings_cls.model_fields.items():
            try:
                field_value, field_key, value_is_complex = self.get_field_value(field, field_name)
                field_value = self.prepare_field_value(field_name, field, field_value, value_is_complex)
            except KeyError:
                continue
            except ValueError as e:
                raise SettingsError(f"error parsing value for field {field_name!r} from source {self!r}") from e
            except Exception as e:
                raise SettingsError(f"error getting value for field {field_name!r} from source {self!r}") from e

            data[field_key] = field_value
        return data

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        return value


class OverrideSettingsSource(SettingsSource):
    """
    Apply `-o dotted.path=value` overrides. This source must precede the YAML
    source, since values from earlier sources win the merge.
    """

    @functools.cached_property
    def parsed_options(self) -> dict[str, t.Any]:
        current_state = t.cast(SettingsCurrentState, self.current_state)
        od: dict[str, t.Any] = {}
        for o in current_state["override"]:
            k, v = [s.strip() for s in o.split("=", 1)]

            target = od
            path = k.split(".")
            for key in path[:-1]:
                target = target.setdefault(key, {})
            target[path[-1]] = yaml.safe_load(v)
        return od

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        if field_name in SkipKeys or field_name not in self.parsed_options:
            raise KeyError(field_name)

        val = self.parsed_options[field_name]
        return val, field_name, isinstance(val, dict)


class YAMLCascadingSettingsSource(SettingsSource):
    """Read `<field>.yaml` from the config root, deep-merging the env.d overlay over it."""

    @functools.cached_property
    def load_paths(self) -> list[Path]:
        current_state = t.cast(SettingsCurrentState, self.current_state)
        return config_paths(current_state["root"], current_state["env"])

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        yamls: list[str] = []
        for path in self.load_paths:
            fn = path / f"{field_name}.yaml"
            if fn.exists():
                yamls.append(fn.read_text(encoding="utf8"))
        if not yamls:
            raise KeyError(field_name)
        return yamls, field_name, True

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        if not isinstance(value, list):
            raise ValueError(field_name)

        merged: t.Any = None
        for document in t.cast(list[str], value):
            loaded = yaml.safe_load(document)
            if isinstance(merged, dict) and isinstance(loaded, dict):
                merged = util.deep_update(t.cast(dict[t.Any, t.Any], merged), t.cast(dict[t.Any, t.Any], loaded))
            else:
                merged = loaded
        return merged


class AnsibleVaultSecretsSource(SettingsSource):
    """Decrypt `secrets.vault.yaml` from the most specific config directory.

    The vault key is taken from $BEACON_VAULT_PASSWORD, then the kernel
    keyring, and finally prompted for; a prompted key is only stored in the
    keyring once it has unlocked the vault.
    """

    Filename: t.ClassVar[str] = "secrets.vault.yaml"

    @functools.cached_property
    def load_path(self) -> Path:
        current_state = t.cast(CurrentState, self.current_state)
        return config_paths(current_state["root"], current_state["env"])[-1]

    def vault_key(self, key_name: str) -> tuple[str, bool]:
        if key := os.environ.get(VaultPasswordVariable):
            return key, False
        try:
            return keyctl.search(key_name).data, False
        except KeyNotExistError:
            return getpass.getpass(f"provide vault key ({key_name}) "), True

    @functools.cached_property
    def secrets(self) -> dict[str, t.Any]:
        current_state = t.cast(CurrentState, self.current_state)
        vp = self.load_path / self.Filename

        # no vault file means no secrets, and no password prompt
        if not vp.exists():
            return {}

        key_name = f"beacon:{current_state['env'].value}:{self.Filename}"
        key, store_key = self.vault_key(key_name)

        # INFO: None is the vault-id -- if we start using a vault ID, we need to specify it here
        vault = VaultLib(secrets=[(None, VaultSecret(key.encode()))])
        with vp.open() as f:
            content = vault.decrypt(f.read())
        if store_key:
            keyctl.add(key_name, key)
        return yaml.safe_load(content) or {}

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        # skip_keys are checked first since self.secrets depends on them
        if field_name in SkipKeys or field_name not in self.secrets:
            raise KeyError(field_name)
        val = self.secrets[field_name]
        return val, field_name, isinstance(val, dict)
