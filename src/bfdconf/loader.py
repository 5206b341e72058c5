"""Configuration loader.

Reads keepalived-style configuration text, runs it through the keyword
table of one process role and returns the records that role builds.
Every load starts from a fresh parse context and keyword table.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from bfdconf.bfd.context import CONSUMER_ROLES, ParseContext, Role
from bfdconf.bfd.keywords import build_keyword_table
from bfdconf.bfd.tracking import reconcile_tracked
from bfdconf.config import BfdConfSettings
from bfdconf.errors import ConfigLoadError, RoleError
from bfdconf.model.instance import BfdInstance
from bfdconf.model.tracking import CheckerTrackedBfd, TrackedBfd, VrrpTrackedBfd
from bfdconf.parser.lexer import tokenize
from bfdconf.parser.scanner import BlockScanner

logger = logging.getLogger(__name__)


class LoadResult(BaseModel):
    """Records built by one role from one configuration load."""

    role: Role
    source: str = Field(default="<string>", description="Where the text came from")
    instances: list[BfdInstance] = Field(
        default_factory=list,
        description="BFD instances (bfd role)",
    )
    vrrp_tracked: list[VrrpTrackedBfd] = Field(
        default_factory=list,
        description="BFD instances tracked by VRRP (vrrp role)",
    )
    checker_tracked: list[CheckerTrackedBfd] = Field(
        default_factory=list,
        description="BFD instances tracked by checkers (checker role)",
    )
    have_bfd_instances: bool = Field(
        default=False,
        description="At least one BFD instance is configured",
    )

    @classmethod
    def from_context(cls, ctx: ParseContext) -> "LoadResult":
        return cls(
            role=ctx.role,
            source=ctx.source,
            instances=list(ctx.instances),
            vrrp_tracked=ctx.vrrp_tracked.to_list(),
            checker_tracked=ctx.checker_tracked.to_list(),
            have_bfd_instances=ctx.have_bfd_instances,
        )

    @property
    def tracked(self) -> list[TrackedBfd]:
        """Tracked references of the loading role."""
        if self.role is Role.VRRP:
            return list(self.vrrp_tracked)
        if self.role is Role.CHECKER:
            return list(self.checker_tracked)
        return []

    def get_instance(self, name: str) -> BfdInstance | None:
        """Get BFD instance by name."""
        for instance in self.instances:
            if instance.name == name:
                return instance
        return None

    def get_tracked(self, name: str) -> TrackedBfd | None:
        """Get a tracked reference of the loading role by name."""
        for tracked in self.tracked:
            if tracked.name == name:
                return tracked
        return None


class ConfigLoader:
    """Loads BFD configuration for one process role.

    Example:
        loader = ConfigLoader()
        result = loader.load("keepalived.conf", Role.VRRP)
    """

    def __init__(self, settings: BfdConfSettings | None = None) -> None:
        self.settings = settings or BfdConfSettings()

    @property
    def enabled_roles(self) -> frozenset[Role]:
        return frozenset(self.settings.enabled_roles)

    def load(self, path: Path | str | None = None, role: Role | None = None) -> LoadResult:
        """Load configuration from file.

        Args:
            path: Configuration file (defaults to settings.config_file)
            role: Process role (defaults to settings.role)

        Raises:
            ConfigLoadError: If the file cannot be read
            ConfigParseError: If braces or quotes are unbalanced
            RoleError: If role is not enabled
        """
        path = Path(path) if path is not None else self.settings.config_file
        text = self._read(path)
        return self.loads(text, role, source=str(path))

    def loads(self, text: str, role: Role | None = None, source: str = "<string>") -> LoadResult:
        """Load configuration from text.

        Raises:
            ConfigParseError: If braces or quotes are unbalanced
            RoleError: If role is not enabled
        """
        role = role or self.settings.role
        self._check_role(role)

        statements = tokenize(text, source)
        table = build_keyword_table(role, self.enabled_roles)
        ctx = ParseContext(role=role, enabled_roles=self.enabled_roles, source=source)

        BlockScanner(table, source).scan(statements, ctx)
        reconcile_tracked(ctx)

        result = LoadResult.from_context(ctx)
        logger.debug(
            "Loaded %s as %s: %d instance(s), %d vrrp / %d checker tracked",
            source,
            role.value,
            len(result.instances),
            len(result.vrrp_tracked),
            len(result.checker_tracked),
        )
        return result

    def load_all(self, path: Path | str | None = None) -> dict[Role, LoadResult]:
        """Load the same file independently for every available role."""
        path = Path(path) if path is not None else self.settings.config_file
        text = self._read(path)
        roles = [Role.PARENT, Role.BFD, *sorted(self.enabled_roles, key=lambda r: r.value)]
        return {role: self.loads(text, role, source=str(path)) for role in roles}

    def _check_role(self, role: Role) -> None:
        if role in CONSUMER_ROLES and role not in self.enabled_roles:
            available = [Role.BFD.value, Role.PARENT.value]
            available += sorted(r.value for r in self.enabled_roles)
            raise RoleError(role.value, available)

    def _read(self, path: Path) -> str:
        """Read raw configuration text from file."""
        if not path.exists():
            raise ConfigLoadError(
                f"Configuration file not found: {path}",
                {"path": str(path)},
            )

        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise ConfigLoadError(
                f"Configuration file is not valid UTF-8: {e}",
                {"path": str(path)},
            ) from e
        except OSError as e:
            raise ConfigLoadError(
                f"Cannot read configuration file: {e}",
                {"path": str(path)},
            ) from e


def load_config(
    path: Path | str,
    role: Role = Role.BFD,
    settings: BfdConfSettings | None = None,
) -> LoadResult:
    """Convenience function to load a configuration file for one role."""
    loader = ConfigLoader(settings)
    return loader.load(path, role)


def loads_config(
    text: str,
    role: Role = Role.BFD,
    settings: BfdConfSettings | None = None,
) -> LoadResult:
    """Convenience function to load configuration text for one role."""
    loader = ConfigLoader(settings)
    return loader.loads(text, role)
