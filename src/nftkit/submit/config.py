"""
Configuration for the nftkit.submit layer.

Defines SubmitSettings, a frozen dataclass carrying how batches are handed to
`nft`. Defaults come from nftkit.core.constants.

Precedence: env > TOML > defaults.

- Environment variables use the prefix NFTKIT_SUBMIT_ (NFTKIT_SUBMIT_NFT_PATH,
  NFTKIT_SUBMIT_TIMEOUT, NFTKIT_SUBMIT_CHECK_ONLY, NFTKIT_SUBMIT_USE_SUDO,
  NFTKIT_SUBMIT_DEFAULT_FAMILY).
- TOML is searched in ./nftkit.toml (a [submit] table or top-level keys), then
  ./pyproject.toml under [tool.nftkit.submit].

Import DAG discipline
- Depends only on the stdlib and nftkit.core.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from ..core.constants import DEFAULT_FAMILY, DEFAULT_NFT_PATH, DEFAULT_SUBMIT_TIMEOUT
from ..core.errors import InvalidEnumError
from ..core.grammar import family_from_value
from .errors import SubmitConfigError

__all__ = ["SubmitSettings"]


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class SubmitSettings:
    """
    Runtime settings for local submission.

    Attributes:
        nft_path (str): nft executable (name on PATH or absolute path).
        timeout (float): Seconds to wait for nft before reporting a timeout.
        check_only (bool): Run nft with -c (validate without applying).
        use_sudo (bool): Prefix the command with `sudo -n`.
        default_family (str): Family used by Builder.from_settings.

    Examples:
        >>> from nftkit.submit.config import SubmitSettings
        >>> SubmitSettings(timeout=2.0).command()
        ['nft', '-j', '-f', '-']
    """

    nft_path: str = DEFAULT_NFT_PATH
    timeout: float = DEFAULT_SUBMIT_TIMEOUT
    check_only: bool = False
    use_sudo: bool = False
    default_family: str = DEFAULT_FAMILY

    def __post_init__(self) -> None:
        if not self.nft_path:
            raise SubmitConfigError("nft_path must not be empty")
        if self.timeout <= 0:
            raise SubmitConfigError(f"timeout must be > 0 (got {self.timeout!r})")

    def command(self) -> list[str]:
        """argv used to feed a JSON batch to nft on stdin."""
        argv = [self.nft_path, "-j"]
        if self.check_only:
            argv.append("-c")
        argv += ["-f", "-"]
        if self.use_sudo:
            argv = ["sudo", "-n", *argv]
        return argv

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: SubmitSettings, cfg: dict[str, Any] | None) -> SubmitSettings:
        """
        Apply a loose config mapping onto SubmitSettings, returning a new instance.

        Raises:
            SubmitConfigError: If a recognized key carries an unusable value.
        """
        if not isinstance(cfg, dict):
            return base

        s = base

        if "nft_path" in cfg and isinstance(cfg["nft_path"], str):
            s = replace(s, nft_path=cfg["nft_path"])

        if "timeout" in cfg:
            try:
                timeout = float(cfg["timeout"])
            except (TypeError, ValueError) as exc:
                raise SubmitConfigError(f"timeout must be a number (got {cfg['timeout']!r})") from exc
            s = replace(s, timeout=timeout)

        if "check_only" in cfg:
            s = replace(s, check_only=_bool(cfg["check_only"]))

        if "use_sudo" in cfg:
            s = replace(s, use_sudo=_bool(cfg["use_sudo"]))

        if "default_family" in cfg:
            try:
                family = family_from_value(cfg["default_family"]).value
            except InvalidEnumError as exc:
                raise SubmitConfigError(str(exc)) from exc
            s = replace(s, default_family=family)

        return s

    @classmethod
    def from_env(cls, base: SubmitSettings | None = None, prefix: str = "NFTKIT_SUBMIT_") -> SubmitSettings:
        """
        Build SubmitSettings from environment variables. Precedence is env > base
        (if provided) > defaults.
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("nft_path", "timeout", "check_only", "use_sudo", "default_family"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> SubmitSettings:
        """
        Build SubmitSettings from a TOML file.

        Search order when `path` is None:
            1) ./nftkit.toml (with either a [submit] table or direct keys)
            2) ./pyproject.toml under [tool.nftkit.submit]

        Returns defaults if no file is present.

        Raises:
            SubmitConfigError: If a file exists but is not valid TOML.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "nftkit.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise SubmitConfigError(f"invalid TOML in {p}: {exc}") from exc

            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("nftkit", {}).get("submit") if isinstance(tool, dict) else None
            else:
                section = data.get("submit")
                cfg = section if isinstance(section, dict) else data
            if isinstance(cfg, dict):
                return cls._apply_mapping(s, cfg)

        return s

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None, prefix: str = "NFTKIT_SUBMIT_") -> SubmitSettings:
        """Load settings with precedence env > TOML > defaults."""
        return cls.from_env(base=cls.from_toml(path), prefix=prefix)
