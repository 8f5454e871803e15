# app/api/v1/__init__.py

from fastapi import APIRouter

from . import auth, profiles, admin, directory, contact

api_router = APIRouter()

# それぞれの router 側で prefix を持っている前提にする
api_router.include_router(auth.router)       # /auth
api_router.include_router(profiles.router)   # /profiles
api_router.include_router(admin.router)      # /admin
api_router.include_router(directory.router)  # /directory, /members
api_router.include_router(contact.router)    # /contact
