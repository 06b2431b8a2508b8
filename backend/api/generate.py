from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from core.errors import GenerationError
from models.generate import GenerateResponse, GenerateErrorResponse, ProviderConfigStatus
from services.generation_service import GenerationService
from services.openrouter_service import API_KEY_NAME

router = APIRouter(prefix="/generate", tags=["generate"])

def get_generation_service(settings: Settings = Depends(get_settings)) -> GenerationService:
    return GenerationService(settings)

async def read_json_body(request: Request):
    """Request body as JSON, or None when it is empty or not JSON"""
    try:
        return await request.json()
    except ValueError:
        return None

@router.post(
    "",
    response_model=GenerateResponse,
    responses={400: {"model": GenerateErrorResponse}, 500: {"model": GenerateErrorResponse}}
)
async def generate_image(request: Request, service: GenerationService = Depends(get_generation_service)):
    """Edit the uploaded image according to the prompt and return the resulting image URL"""
    body = await read_json_body(request)

    try:
        extracted = await service.generate(body)
        return GenerateResponse(image=extracted.url)

    except GenerationError as e:
        if e.status_code >= 500:
            print(f"❌ Image generation failed: {e.message}")
        return JSONResponse(status_code=e.status_code, content=e.to_payload())

    except Exception as e:
        print(f"❌ Image generation API error: {e!r}")
        return JSONResponse(
            status_code=500,
            content={"error": str(e) or "Internal server error"}
        )

@router.get("/health", response_model=ProviderConfigStatus)
async def check_openrouter_config(settings: Settings = Depends(get_settings)):
    """Check if OpenRouter is properly configured"""
    has_key = settings.has_api_key

    return ProviderConfigStatus(
        configured=has_key,
        model=settings.OPENROUTER_MODEL,
        message="OpenRouter API key configured" if has_key else f"{API_KEY_NAME} is not set"
    )
