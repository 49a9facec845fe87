import logging
import os
import posixpath

import config
from Services.assembler import OutputUnit
from Services.errors import OutputWriteError

logger = logging.getLogger(__name__)


def build_app_entry(name: str, import_dir: str = "./components") -> str:
    return "\n".join([
        "import React from 'react';",
        f"import {name} from '{posixpath.join(import_dir, name)}';",
        "",
        "function App() {",
        "  return (",
        '    <div className="App">',
        f"      <{name} />",
        "    </div>",
        "  );",
        "}",
        "",
        "export default App;",
        "",
    ])


def _app_entry_path(src_dir: str) -> str:
    # create-react-app projects ship App.js; keep writing to it when present.
    legacy = os.path.join(src_dir, "App.js")
    if os.path.isfile(legacy):
        return legacy
    return os.path.join(src_dir, "App.jsx")


def _discard(paths):
    # Leave no component behind that the App entry does not import.
    for path in paths:
        try:
            os.remove(path)
        except OSError as e:
            logger.warning("[WRITE] Could not remove partial file %s: %s", path, e)


def write_output(unit: OutputUnit, project_dir: str | None = None) -> str:
    """Persist the component, its stylesheet and the App entry.

    Returns the path of the written component file.
    """
    project_dir = project_dir or config.PROJECT_DIR
    src_dir = os.path.join(project_dir, "src")
    components_dir = os.path.join(project_dir, config.COMPONENTS_SUBDIR)
    component_path = os.path.join(components_dir, unit.component_filename)
    css_path = os.path.join(components_dir, unit.stylesheet_filename)

    rel = os.path.relpath(components_dir, src_dir).replace(os.sep, "/")
    import_dir = "./" + rel if not rel.startswith(".") else rel

    written = []
    try:
        os.makedirs(components_dir, exist_ok=True)
        for path, content in ((component_path, unit.component_code), (css_path, unit.stylesheet)):
            with open(path, "w", encoding="utf-8") as f:
                written.append(path)
                f.write(content)
        with open(_app_entry_path(src_dir), "w", encoding="utf-8") as f:
            f.write(build_app_entry(unit.name, import_dir))
    except OSError as e:
        _discard(written)
        raise OutputWriteError(unit.name, component_path, str(e)) from e

    logger.info("[WRITE] Component %s written to %s", unit.name, component_path)
    return component_path
