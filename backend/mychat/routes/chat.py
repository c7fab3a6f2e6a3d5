from fastapi import APIRouter, Depends
from typing import List
from mychat.schemas.chat import SendMessageRequest, ChatResponse
from mychat.services.chat import ChatService
from mychat.core.deps import get_chat_service

router = APIRouter()

# Sync handlers: FastAPI runs them in the threadpool, so the bot delay does not block the loop
@router.post("/send", response_model=ChatResponse)
def send_message(
    request: SendMessageRequest,
    chat: ChatService = Depends(get_chat_service)
):
    """
    Send a message to the bot and get a canned reply
    """
    return chat.send(request.content)

@router.get("/responses", response_model=List[str])
def get_responses(chat: ChatService = Depends(get_chat_service)):
    """
    List every reply the bot can give
    """
    return chat.responses()
