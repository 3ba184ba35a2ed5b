from __future__ import annotations

import os

from fastapi import Depends, FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.dependencies import require_admin, require_user, require_user_id
from .auth.models import LoginRequest, RegisterRequest, UserOut
from .auth.users import authenticate, register_user
from .errors import CatalogUnavailable, InvalidShape, InvalidTarget, RecipeNotFound, RegistrationError
from .planner.config import DEFAULT_PLANNER_CONFIG
from .planner.models import MealPlanRequest, MealPlanResponse
from .planner.service import find_meal_plans
from .planner.shapes import preset_shapes
from .recipes.catalog import recipe_out
from .recipes.models import Category, Difficulty, RecipeIn, RecipeListResponse, RecipeOut
from .recipes.store import get_store

app = FastAPI(title="Meal Time Planner API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "meal-planner-secret-change-in-production"),
)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "categories": [c.value for c in Category],
        "difficulties": [d.value for d in Difficulty],
        "shapes": preset_shapes(),
        "default_tolerance": DEFAULT_PLANNER_CONFIG.default_tolerance,
        "max_results": DEFAULT_PLANNER_CONFIG.max_results,
    }


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/register", response_model=UserOut, status_code=201)
def register(body: RegisterRequest) -> dict:
    if body.confirm_password is not None and body.confirm_password != body.password:
        raise HTTPException(status_code=422, detail="Passwords do not match")
    try:
        return register_user(body.username, body.email, body.password, body.full_name)
    except RegistrationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Recipe endpoints ─────────────────────────────────────────────────────


@app.get("/recipes", response_model=RecipeListResponse)
def list_recipes(q: str | None = None, user_id: int = Depends(require_user_id)) -> RecipeListResponse:
    try:
        records = get_store().list_recipes(user_id, search=q)
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    recipes = [recipe_out(r) for r in records]
    return RecipeListResponse(recipes=recipes, total=len(recipes))


@app.post("/recipes", response_model=RecipeOut, status_code=201)
def create_recipe(body: RecipeIn, user_id: int = Depends(require_user_id)) -> RecipeOut:
    try:
        record = get_store().create_recipe(user_id, body)
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return recipe_out(record)


@app.get("/recipes/{recipe_id}", response_model=RecipeOut)
def get_recipe(recipe_id: int, user_id: int = Depends(require_user_id)) -> RecipeOut:
    try:
        return recipe_out(get_store().get_recipe(user_id, recipe_id))
    except RecipeNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@app.put("/recipes/{recipe_id}", response_model=RecipeOut)
def update_recipe(recipe_id: int, body: RecipeIn, user_id: int = Depends(require_user_id)) -> RecipeOut:
    try:
        return recipe_out(get_store().update_recipe(user_id, recipe_id, body))
    except RecipeNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@app.delete("/recipes/{recipe_id}")
def delete_recipe(recipe_id: int, user_id: int = Depends(require_user_id)) -> dict:
    try:
        get_store().delete_recipe(user_id, recipe_id)
    except RecipeNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except CatalogUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return {"status": "deleted", "id": recipe_id}


# ── Meal planner ─────────────────────────────────────────────────────────


@app.post("/meal-plans/search", response_model=MealPlanResponse)
def search_meal_plans(body: MealPlanRequest, user_id: int = Depends(require_user_id)) -> MealPlanResponse:
    try:
        return find_meal_plans(user_id, body)
    except InvalidShape as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except InvalidTarget as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
