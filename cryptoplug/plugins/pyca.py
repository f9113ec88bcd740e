"""Plugin descriptor for the pyca/cryptography backend."""

import logging

from ..core.models import FeatureDescriptor
from ..config import get_config, plugin_setting
from ..features import (
    BuildFlags,
    FeaturePublisher,
    build_subtables,
    get_publisher,
    probe_build_flags,
)
from .base import Plugin

logger = logging.getLogger(__name__)


class CryptographyPlugin(Plugin):
    """Advertises what the installed ``cryptography`` library can construct.

    The feature table is built on the first get_features() call and shared
    process-wide by every descriptor of this backend; the build flags and
    the ``use_rng`` setting in effect at that moment are the ones that count.

    Args:
        flags: Build flag profile. Probed from the installed library if None.
        include_generic_pubkey: Assemble the generic public key loader
            sub-table as well.
    """

    plugin_name = "cryptography"

    def __init__(
        self,
        flags: BuildFlags | None = None,
        include_generic_pubkey: bool = False,
    ) -> None:
        super().__init__()
        self._flags = flags
        self._include_generic_pubkey = include_generic_pubkey

    def get_name(self) -> str:
        return self.plugin_name

    def get_features(self) -> tuple[tuple[FeatureDescriptor, ...], int]:
        self._ensure_alive()
        return self.publisher.get_features()

    @property
    def publisher(self) -> FeaturePublisher:
        return get_publisher(self.plugin_name, self._create_publisher)

    def _create_publisher(self) -> FeaturePublisher:
        flags = self._flags if self._flags is not None else probe_build_flags()
        return FeaturePublisher(
            self.plugin_name,
            build_subtables(flags),
            rng_enabled=self._use_rng,
            include_generic_pubkey=self._include_generic_pubkey,
        )

    def _use_rng(self) -> bool:
        use_rng = get_config().get_bool(plugin_setting(self.plugin_name, "use_rng"), True)
        logger.debug("%s: use_rng=%s", self.plugin_name, use_rng)
        return use_rng
