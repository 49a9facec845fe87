import logging
import os
import shutil

import config
from Services.errors import ProvisioningError

logger = logging.getLogger(__name__)


def project_exists(project_dir: str) -> bool:
    return os.path.isfile(os.path.join(project_dir, "package.json"))


def ensure_project(project_dir: str | None = None, templates_dir: str | None = None) -> bool:
    """Scaffold the target React project from the template tree.

    No-op when the project already has a package.json. Returns True when
    a new project was created.
    """
    project_dir = project_dir or config.PROJECT_DIR
    templates_dir = templates_dir or config.TEMPLATES_DIR

    if project_exists(project_dir):
        logger.info("[PROJECT] React app already exists at %s", project_dir)
        return False

    if not os.path.isdir(templates_dir):
        raise ProvisioningError(f"Template directory not found: {templates_dir}")

    logger.info("[PROJECT] Creating React app at %s", project_dir)
    try:
        shutil.copytree(templates_dir, project_dir, dirs_exist_ok=True)
        os.makedirs(os.path.join(project_dir, config.COMPONENTS_SUBDIR), exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise ProvisioningError(f"Could not create React app at {project_dir}: {e}") from e

    return True
