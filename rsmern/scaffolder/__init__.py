"""rsmern scaffolder -- project initialization and feature generation.

Quick usage::

    from rsmern.scaffolder import (
        FileSystemGateway, ProcessRunner, ProjectInitializer,
        StepServices, TemplateCatalog,
    )

    services = StepServices(
        gateway=FileSystemGateway(),
        runner=ProcessRunner(),
        catalog=TemplateCatalog(),
    )
    result = ProjectInitializer(services, base_dir="/tmp").initialize("my-app")
"""

from rsmern.scaffolder.feature import FeatureGenerator, FeatureResult, feature_paths
from rsmern.scaffolder.gateway import FileSystemGateway
from rsmern.scaffolder.initializer import ProjectInitializer, ScaffoldResult
from rsmern.scaffolder.process import ProcessRunner, ToolResult
from rsmern.scaffolder.steps import (
    DirectoryStep,
    FileStep,
    PatchStep,
    StepOutcome,
    StepServices,
    ToolStep,
)
from rsmern.scaffolder.templates import TemplateCatalog, TemplateRenderer

__all__ = [
    "DirectoryStep",
    "FeatureGenerator",
    "FeatureResult",
    "FileStep",
    "FileSystemGateway",
    "PatchStep",
    "ProcessRunner",
    "ProjectInitializer",
    "ScaffoldResult",
    "StepOutcome",
    "StepServices",
    "TemplateCatalog",
    "TemplateRenderer",
    "ToolResult",
    "ToolStep",
    "feature_paths",
]
