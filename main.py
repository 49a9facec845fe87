import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

import config
from logging_config import setup_logging
from models import GenerateRequest
from Services.assembler import OutputUnit, assemble
from Services.component_writer import write_output
from Services.errors import InvalidTreeError, OutputWriteError, ProvisioningError
from Services.font_service import resolve_font_css
from Services.project_provisioner import ensure_project
from Services.tree_compiler import compile_tree

setup_logging()
logger = logging.getLogger("api")

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def build_component(nodes: list) -> OutputUnit:
    compiled = compile_tree(nodes)
    font_css = resolve_font_css(compiled.fonts)
    return assemble(compiled, compiled.roots[0].get("name"), font_css)


@app.get("/")
def root():
    return {"message": "Figma component compiler running"}


@app.get("/health")
def health():
    return {"status": "ok", "message": "Component compiler is running"}


@app.post("/compile")
def compile_component(req: GenerateRequest):
    try:
        unit = build_component(req.node_dicts())
    except InvalidTreeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "name": unit.name,
        "component": unit.component_code,
        "stylesheet": unit.stylesheet,
    }


@app.post("/generate-component")
@app.post("/api/generate")
def generate_component(req: GenerateRequest):
    nodes = req.node_dicts()

    # -------- 1. Compile (nothing touches disk on bad input) --------
    try:
        unit = build_component(nodes)
    except InvalidTreeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # -------- 2. Target project --------
    try:
        ensure_project()
    except ProvisioningError as e:
        logger.error("[PROJECT] %s", e)
        raise HTTPException(
            status_code=503,
            detail={"error": "provisioning_failed", "message": str(e)},
        )

    # -------- 3. Write --------
    try:
        component_path = write_output(unit)
    except OutputWriteError as e:
        logger.error("[WRITE] %s", e)
        raise HTTPException(
            status_code=500,
            detail={"error": "write_failed", "componentName": e.name, "message": str(e)},
        )

    return {
        "success": True,
        "message": f"Component {unit.name} generated successfully! "
                   f"Run 'npm run dev' in {config.PROJECT_DIR}.",
        "componentName": unit.name,
        "componentPath": component_path,
    }


"""
figma plugin → component compiler
FastAPI server turning extracted Figma node trees into React components.
"""
