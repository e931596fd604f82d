"""Gate on the server version, collect properties and hand them to the engine."""

from __future__ import annotations

import logging
import platform
from dataclasses import dataclass, field
from typing import Mapping

from scanbridge.config import BridgeSettings
from scanbridge.engine import AnalysisEngine
from scanbridge.exceptions import BootstrapError
from scanbridge.properties import VERBOSE
from scanbridge.reconciler import NoDecryption, PropertyDecryptor, ReconciliationContext
from scanbridge.runtime.env_policy import SCANNER_OPTS_ENV, env_properties, scanner_opts
from scanbridge.schema import ProjectSnapshot
from scanbridge.version_gate import check_server_version

logger = logging.getLogger(__name__)


def log_environment_information() -> None:
    logger.info(
        "Python %s %s (%s)",
        platform.python_version(),
        platform.python_implementation(),
        platform.architecture()[0],
    )
    logger.info("%s %s (%s)", platform.system(), platform.release(), platform.machine())
    opts = scanner_opts()
    if opts is not None:
        logger.info("%s=%s", SCANNER_OPTS_ENV, opts)


@dataclass
class ScannerBootstrap:
    engine: AnalysisEngine
    snapshot: ProjectSnapshot
    user_properties: Mapping[str, str] = field(default_factory=dict)
    decryptor: PropertyDecryptor = field(default_factory=NoDecryption)
    settings: BridgeSettings = field(default_factory=BridgeSettings)

    def execute(self) -> dict[str, str]:
        """Run one bootstrap; every failure surfaces as a BootstrapError."""
        try:
            log_environment_information()
            self.engine.start()
            context = ReconciliationContext(
                snapshot=self.snapshot,
                user_properties=dict(self.user_properties),
                env_properties=env_properties(),
                settings=self.settings,
                server_version=self.engine.server_version(),
            )
            if context.is_hosted_service():
                logger.info("Communicating with hosted analysis service")
            else:
                if context.server_version is not None:
                    logger.info("Communicating with analysis server %s", context.server_version)
                check_server_version(
                    context.server_version, min_version=self.settings.min_version
                )

            if logger.isEnabledFor(logging.DEBUG):
                self.engine.set_global_property(VERBOSE, "true")

            properties = context.collect_properties(self.decryptor)
            self.engine.execute(properties)
            return properties
        except Exception as exc:
            raise BootstrapError.wrap(exc) from exc
