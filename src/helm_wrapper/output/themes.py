"""Stage color map."""

from helm_wrapper.core.orchestrator import Stage

STAGE_COLORS: dict[Stage, str] = {
    Stage.LOAD: "magenta",
    Stage.REGISTER_REPOSITORY: "cyan",
    Stage.EXTRACT_ARCHIVE: "cyan",
    Stage.BUILD_DEPENDENCIES: "yellow",
    Stage.BUILD_COMMAND: "magenta",
    Stage.EXECUTE: "red bold",
}


def styled_stage(stage: Stage) -> str:
    color = STAGE_COLORS.get(stage, "white")
    return f"[{color}]{stage.value}[/{color}]"
