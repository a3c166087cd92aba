import argparse
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from research_hub import __version__
from research_hub.core.common import logger
from research_hub.core.config import Config
from research_hub.core.errors import NotFoundError, ValidationError
from research_hub.core.models import UploadedDocument
from research_hub.core.scope import workspace_view
from research_hub.core.session import ResearchSession


class CandidateBody(BaseModel):
    title: Optional[str] = None
    authors: List[str] = []
    year: Optional[int] = None
    abstract: Optional[str] = None
    journal: Optional[str] = None
    citations: Optional[int] = None
    url: Optional[str] = None
    tags: Optional[List[str]] = None


class QueryBody(BaseModel):
    query: str = ""


class MessageBody(BaseModel):
    message: str = ""
    view: Optional[str] = None


class WorkspaceBody(BaseModel):
    name: str
    description: str = ""
    color: str = "indigo"


class RenameBody(BaseModel):
    name: str


class MembershipBody(BaseModel):
    paper_id: str


class ViewBody(BaseModel):
    view: str


class ThemeBody(BaseModel):
    dark_mode: bool


def create_app(session: Optional[ResearchSession] = None, config_path: Optional[str] = None) -> FastAPI:
    """创建 HTTP 接口

    Args:
        session: 已构造好的会话，为空时根据配置文件创建
        config_path: 配置文件路径
    """
    if session is None:
        session = ResearchSession.from_config(Config.load(config_path))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await session.close()

    app = FastAPI(
        title="ResearchHub API",
        description="Session state and AI task orchestration for a research workspace",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.session = session

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # 在生产环境中应该设置具体的域名
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.get("/")
    async def root():
        return {"message": "Welcome to ResearchHub API"}

    @app.get("/status")
    async def status():
        return {
            "slots": session.status(),
            "typing": {
                session.brainy_log.name: session.brainy_log.typing,
                session.workspace_log.name: session.workspace_log.typing,
            },
            "active_view": session.active_view,
            "dark_mode": session.preferences.dark_mode,
            "authenticated": session.preferences.authenticated,
        }

    @app.post("/slots/{name}/cancel")
    async def cancel_slot(name: str):
        return {"cancelled": session.cancel(name)}

    # 论文
    @app.get("/papers")
    async def list_papers():
        return session.store.list_papers()

    @app.post("/papers/import")
    async def import_paper(body: CandidateBody):
        paper = session.import_paper(body.model_dump())
        return {"imported": paper is not None, "paper": paper}

    # 工作区
    @app.get("/workspaces")
    async def list_workspaces():
        return session.store.list_workspaces()

    @app.post("/workspaces")
    async def add_workspace(body: WorkspaceBody):
        return session.store.add_workspace(body.name, body.description, color=body.color)

    @app.patch("/workspaces/{workspace_id}")
    async def rename_workspace(workspace_id: str, body: RenameBody):
        return session.store.rename_workspace(workspace_id, body.name)

    @app.delete("/workspaces/{workspace_id}")
    async def delete_workspace(workspace_id: str):
        return session.store.delete_workspace(workspace_id)

    @app.post("/workspaces/{workspace_id}/papers")
    async def add_workspace_paper(workspace_id: str, body: MembershipBody):
        return session.store.add_paper_to_workspace(workspace_id, body.paper_id)

    @app.get("/workspaces/{workspace_id}/papers")
    async def workspace_papers(workspace_id: str):
        return session.scoped_papers(workspace_view(workspace_id))

    @app.post("/view")
    async def set_view(body: ViewBody):
        session.set_view(body.view)
        return {"active_view": session.active_view}

    # AI 操作
    @app.post("/search")
    async def search(body: QueryBody):
        results = await session.search(body.query)
        if results is None:
            raise ValidationError("Search query must not be empty.")
        return [{"paper": c, "imported": session.is_imported(c)} for c in results]

    @app.get("/search")
    async def search_results():
        return [{"paper": c, "imported": session.is_imported(c)} for c in session.search_results]

    @app.post("/documents")
    async def ingest_document(file: UploadFile = File(...)):
        document = UploadedDocument(
            filename=file.filename or "",
            content_type=file.content_type,
            data=await file.read(),
        )
        paper = await session.ingest_document(document)
        return {"paper": paper, "analysis": session.active_analysis}

    @app.post("/labs/{tool}")
    async def run_lab_tool(tool: str):
        result = await session.run_lab_tool(tool)
        return {"tool": tool, "result": result}

    @app.post("/chat/brainy")
    async def chat_with_brainy(body: MessageBody):
        reply = await session.chat_with_brainy(body.message)
        return {"reply": reply, "messages": session.brainy_log.history()}

    @app.post("/chat/workspace")
    async def chat_with_workspace(body: MessageBody):
        reply = await session.chat_with_workspace(body.message, body.view)
        return {"reply": reply, "messages": session.workspace_log.history()}

    @app.get("/chat/{log_name}")
    async def chat_history(log_name: str):
        logs = {session.brainy_log.name: session.brainy_log, session.workspace_log.name: session.workspace_log}
        if log_name not in logs:
            raise NotFoundError(f"Conversation not found: {log_name}")
        return logs[log_name].history()

    # 偏好
    @app.post("/preferences/theme")
    async def set_theme(body: ThemeBody):
        session.preferences.set_dark_mode(body.dark_mode)
        return {"dark_mode": session.preferences.dark_mode}

    @app.post("/login")
    async def login():
        session.preferences.login()
        return {"authenticated": True}

    @app.post("/logout")
    async def logout():
        session.preferences.logout()
        return {"authenticated": False}

    return app


if __name__ == "__main__":
    import uvicorn

    args = argparse.ArgumentParser()
    args.add_argument("--config", type=str, default="config.yaml")
    args.add_argument("--host", type=str, default="0.0.0.0")
    args.add_argument("--port", type=int, default=8000)
    args = args.parse_args()

    logger.info(f"启动 ResearchHub API: {args.host}:{args.port}")
    uvicorn.run(create_app(config_path=args.config), host=args.host, port=args.port)
