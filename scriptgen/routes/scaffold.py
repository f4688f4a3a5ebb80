# scriptgen/routes/scaffold.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from scriptgen.core.errors import ScaffoldGenerationError, SessionBusyError
from scriptgen.models.scaffold import (
    ArchiveRequest,
    GeneratedFile,
    GenerateRequest,
    MessageRequest,
    SessionState,
    TurnResponse,
)
from scriptgen.services.archive import archive_filename, build_zip
from scriptgen.services.file_tree import build_file_tree, find_file, render_code_tree
from scriptgen.services.gemini_client import GeminiClient
from scriptgen.services.prompt_builder import construct_full_prompt
from scriptgen.services.session import FILES_READY_MESSAGE, ScaffoldSession, SessionStore
from scriptgen.services.validation import validate_file_path, validate_text

router = APIRouter()

ZIP_MEDIA_TYPE = "application/zip"

def get_store(request: Request) -> SessionStore:
    return request.app.state.store

def get_client(request: Request) -> GeminiClient:
    return request.app.state.client

def get_session(session_id: str, store: SessionStore = Depends(get_store)) -> ScaffoldSession:
    try:
        return store.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")

def zip_response(files: List[GeneratedFile], first_user_message: str | None) -> Response:
    filename = archive_filename(first_user_message)
    return Response(
        content=build_zip(files),
        media_type=ZIP_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

def session_state(session: ScaffoldSession) -> SessionState:
    files = session.latest_files() or []
    tree = build_file_tree(files)
    return SessionState(
        session_id=session.session_id,
        is_first_request=session.is_first_request,
        is_loading=session.is_loading,
        error=session.error,
        history=session.history,
        files=files,
        tree=tree,
        code_tree=render_code_tree(tree),
    )

@router.get("/health")
def health():
    return {"status": "ok"}

# ----- stateful: the server keeps the conversation -----

@router.post("/v1/sessions", response_model=SessionState, status_code=201)
def create_session(store: SessionStore = Depends(get_store)):
    return session_state(store.create())

@router.get("/v1/sessions/{session_id}", response_model=SessionState)
def read_session(session: ScaffoldSession = Depends(get_session)):
    return session_state(session)

@router.delete("/v1/sessions/{session_id}", status_code=204)
def delete_session(
    session: ScaffoldSession = Depends(get_session),
    store: SessionStore = Depends(get_store),
):
    store.delete(session.session_id)
    return Response(status_code=204)

@router.post("/v1/sessions/{session_id}/messages", response_model=TurnResponse)
def post_message(req: MessageRequest, session: ScaffoldSession = Depends(get_session)):
    try:
        outcome = session.submit(req.prompt, req.options, req.image)
    except SessionBusyError as ex:
        raise HTTPException(status_code=409, detail=str(ex))
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))

    tree = build_file_tree(outcome.files)
    return TurnResponse(
        reply=outcome.reply,
        error=outcome.error,
        files=outcome.files,
        tree=tree,
        code_tree=render_code_tree(tree),
        is_first_request=session.is_first_request,
    )

@router.get("/v1/sessions/{session_id}/files", response_model=GeneratedFile)
def read_file(path: str, session: ScaffoldSession = Depends(get_session)):
    f = find_file(session.latest_files(), path)
    if f is None:
        raise HTTPException(status_code=404, detail=f"No such file: {path}")
    return f

@router.get("/v1/sessions/{session_id}/archive")
def download_archive(session: ScaffoldSession = Depends(get_session)):
    files = session.latest_files()
    if not files:
        raise HTTPException(status_code=404, detail="No project files generated yet")
    return zip_response(files, session.first_user_message())

# ----- stateless: the browser keeps the conversation -----

@router.post("/v1/scaffold/generate", response_model=TurnResponse)
def generate(req: GenerateRequest, client: GeminiClient = Depends(get_client)):
    if not req.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt must not be empty")

    full_prompt = construct_full_prompt(req.prompt, req.options, req.is_first_request)
    try:
        files = client.generate_files(full_prompt, req.existing_files, req.image)
    except ScaffoldGenerationError as ex:
        return TurnResponse(
            reply=f"Error: {ex}",
            error=str(ex),
            files=req.existing_files,
            is_first_request=req.is_first_request,
        )

    tree = build_file_tree(files)
    return TurnResponse(
        reply=FILES_READY_MESSAGE,
        files=files,
        tree=tree,
        code_tree=render_code_tree(tree),
        is_first_request=False,
    )

@router.post("/v1/scaffold/archive")
def archive(req: ArchiveRequest):
    if not req.files:
        raise HTTPException(status_code=400, detail="No files to archive")
    try:
        for i, f in enumerate(req.files):
            validate_file_path(f.name, f"files[{i}].name")
            validate_text(f.content, f"files[{i}].content")
    except ValueError as ex:
        raise HTTPException(status_code=400, detail=str(ex))
    return zip_response(req.files, req.project_prompt)
