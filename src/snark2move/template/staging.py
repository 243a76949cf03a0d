from __future__ import annotations
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from snark2move.core.errors import ArtifactIOError

logger = logging.getLogger(__name__)


class Stager(Protocol):
    """Stage an output directory from a template directory."""

    def stage(self, template_dir: Path, out_dir: Path) -> None: ...


class RsyncStager:
    """`rsync -a <template>/ <out>/`, merging into an existing output tree."""

    def __init__(self, executable: str = "rsync"):
        self.executable = executable

    def stage(self, template_dir: Path, out_dir: Path) -> None:
        cmd = [self.executable, "-a", f"{template_dir}/", f"{out_dir}/"]
        logger.debug("staging: %s", " ".join(cmd))
        try:
            res = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ArtifactIOError(f"cannot run {self.executable}: {e.strerror or e}",
                                  artifact=str(template_dir)) from e
        if res.returncode != 0:
            raise ArtifactIOError(
                f"{self.executable} exited with status {res.returncode}: {res.stderr.strip()}",
                artifact=str(template_dir),
            )


class CopyTreeStager:
    def stage(self, template_dir: Path, out_dir: Path) -> None:
        logger.debug("staging: copytree %s -> %s", template_dir, out_dir)
        if not Path(template_dir).is_dir():
            raise ArtifactIOError("template directory does not exist", artifact=str(template_dir))
        try:
            shutil.copytree(template_dir, out_dir, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            raise ArtifactIOError(f"copy failed: {e}", artifact=str(template_dir)) from e


STAGERS = {
    "rsync": RsyncStager,
    "copy": CopyTreeStager,
}
