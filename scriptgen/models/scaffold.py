# scriptgen/models/scaffold.py
from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

Language = Literal["javascript", "typescript", "python", "golang"]
Platform = Literal["web", "discord", "telegram", "whatsapp"]
ModuleSystem = Literal["esm", "commonjs"]
Database = Literal["none", "json", "sqlite", "mysql", "mongodb"]
Role = Literal["user", "assistant", "system"]

MODULE_SYSTEM_LANGUAGES = ("javascript", "typescript")

class GeneratedFile(BaseModel):
    name: str
    content: str

class ProjectOptions(BaseModel):
    language: Language = "javascript"
    platform: Platform = "web"
    module_system: ModuleSystem = "esm"
    database: Database = "none"

    @property
    def uses_module_system(self) -> bool:
        return self.language in MODULE_SYSTEM_LANGUAGES

class ImageAttachment(BaseModel):
    filename: str = "image.png"
    mime_type: str = "image/png"
    data: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def strip_data_url(self) -> "ImageAttachment":
        # "data:image/jpeg;base64,AAAA" -> mime_type "image/jpeg", data "AAAA"
        if self.data.startswith("data:") and "," in self.data:
            header, payload = self.data.split(",", 1)
            mime = header[len("data:"):].split(";", 1)[0].strip()
            if mime:
                self.mime_type = mime
            self.data = payload
        if not self.data.strip():
            raise ValueError("image data must not be empty")
        return self

class ChatTurn(BaseModel):
    role: Role
    content: str
    files: Optional[List[GeneratedFile]] = None

class FileNode(BaseModel):
    name: str
    type: Literal["file"] = "file"
    path: str

class FolderNode(BaseModel):
    name: str
    type: Literal["folder"] = "folder"
    children: List[FileTreeNode] = []

FileTreeNode = Union[FolderNode, FileNode]
FolderNode.model_rebuild()

# ----- HTTP payloads -----

class MessageRequest(BaseModel):
    prompt: str
    options: ProjectOptions = ProjectOptions()
    image: Optional[ImageAttachment] = None

class GenerateRequest(MessageRequest):
    existing_files: List[GeneratedFile] = []
    is_first_request: bool = True

class ArchiveRequest(BaseModel):
    files: List[GeneratedFile]
    project_prompt: Optional[str] = None

class TurnResponse(BaseModel):
    reply: str
    error: Optional[str] = None
    files: List[GeneratedFile] = []
    tree: List[FileTreeNode] = []
    code_tree: str = ""
    is_first_request: bool = True

class SessionState(BaseModel):
    session_id: str
    is_first_request: bool
    is_loading: bool
    error: Optional[str] = None
    history: List[ChatTurn] = []
    files: List[GeneratedFile] = []
    tree: List[FileTreeNode] = []
    code_tree: str = ""
