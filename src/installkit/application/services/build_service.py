from __future__ import annotations

import logging

from installkit.application.services.artifact_service import ArtifactService, output_pattern
from installkit.application.services.packager_service import PackagerService
from installkit.application.services.resource_service import ResourceService
from installkit.core.config import AppPaths, AppSettings, ToolEnvironment
from installkit.core.errors import MissingEnvironmentError
from installkit.core.files import reset_directory
from installkit.domain.models.build import BuildArtifact, BuildTarget

logger = logging.getLogger(__name__)


class BuildService:
    """Runs one packaging build: acquire resources, package, checksum the output.

    Callers validate the configuration first and pass the validated version.
    """

    def __init__(
        self,
        paths: AppPaths,
        settings: AppSettings,
        environment: ToolEnvironment,
        resources: ResourceService,
        target: BuildTarget,
    ) -> None:
        self.paths = paths
        self.settings = settings
        self.environment = environment
        self.resources = resources
        self.target = target
        self.packager = PackagerService(paths, target, environment)
        self.artifacts = ArtifactService(paths.dist_dir)

    def build(self, version: str) -> BuildArtifact:
        output_pattern(self.target.package_type)

        if self.target.package_type == "innosetup" and not self.environment.innosetup_path:
            raise MissingEnvironmentError("Environment variable INNOSETUP_PATH not set")

        package_config = self.packager.package_config()
        launcher = self.packager.configure(self.resources.acquire(self.settings.tool_resource))

        runtime_id = self.settings.runtime_resource(self.target.os, self.target.arch)
        if self.resources.is_configured(runtime_id):
            runtime = self.resources.acquire(runtime_id)
        else:
            logger.warning("No runtime configured (%s); packaging without one", runtime_id)
            runtime = None

        payload = self.resources.acquire(self.settings.payload_resource)
        reset_directory(self.paths.dist_dir)

        cmd = self.packager.build_command_line(
            launcher=launcher,
            payload=payload,
            package_config=package_config,
            output_dir=self.paths.dist_dir,
            version=version,
            runtime=runtime,
        )
        self.packager.run(cmd)

        return self.artifacts.process_output(self.target.package_type)
