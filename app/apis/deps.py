from __future__ import annotations

from fastapi import Request

from app.modules.generation.pipeline import GenerationPipeline


def get_pipeline(request: Request) -> GenerationPipeline:
    """Pipeline created by the application lifespan.

    Tests override this dependency with a pipeline around a fake client.
    """
    return request.app.state.pipeline
