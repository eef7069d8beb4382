"""stackgen scaffolder -- turns a generation request into starter files.

Quick usage::

    from stackgen.scaffolder import GenerationRequest, generate

    project = generate(
        GenerationRequest(app_name="Demo", description="test app", stack="HTML")
    )
    project.files["index.html"]
"""

from stackgen.scaffolder.generator import (
    GeneratedProject,
    GenerationRequest,
    Stack,
    StackGenerator,
    generate,
    generate_code,
    write_project,
)
from stackgen.scaffolder.templates import TemplateRenderer

__all__ = [
    "GeneratedProject",
    "GenerationRequest",
    "Stack",
    "StackGenerator",
    "TemplateRenderer",
    "generate",
    "generate_code",
    "write_project",
]
