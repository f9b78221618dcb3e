"""GraphQL schema exposing user queries and mutations.

Every resolver builds a fresh ``UserRepository`` on the shared database
handle and runs the blocking PyMongo call in the threadpool.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import strawberry
from fastapi import Request
from starlette.concurrency import run_in_threadpool
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from usergraph.database.mongo import MongoConnection
from usergraph.dtos import user as dto
from usergraph.repositories.user import UserRepository


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    name: str
    email: str
    age: Optional[int]
    created_at: str

    @classmethod
    def from_dto(cls, user: dto.User) -> "UserType":
        return cls(
            id=strawberry.ID(user.id),
            name=user.name,
            email=user.email,
            age=user.age,
            created_at=user.created_at,
        )


def _repository(info: Info) -> UserRepository:
    connection: MongoConnection = info.context["connection"]
    return UserRepository(connection.get_database())


def _maybe_user(user: Optional[dto.User]) -> Optional[UserType]:
    return UserType.from_dto(user) if user else None


@strawberry.type
class Query:
    @strawberry.field
    async def users(self, info: Info) -> List[UserType]:
        users = await run_in_threadpool(_repository(info).get_all)
        return [UserType.from_dto(user) for user in users]

    @strawberry.field
    async def user(self, info: Info, id: strawberry.ID) -> Optional[UserType]:
        user = await run_in_threadpool(_repository(info).get_by_id, str(id))
        return _maybe_user(user)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_user(
        self,
        info: Info,
        name: str,
        email: str,
        age: Optional[int] = None,
    ) -> UserType:
        data = dto.CreateUserInput(name=name, email=email, age=age)
        user = await run_in_threadpool(_repository(info).create, data)
        return UserType.from_dto(user)

    @strawberry.mutation
    async def update_user(
        self,
        info: Info,
        id: strawberry.ID,
        name: Optional[str] = strawberry.UNSET,
        email: Optional[str] = strawberry.UNSET,
        age: Optional[int] = strawberry.UNSET,
    ) -> Optional[UserType]:
        # Omitted arguments must stay out of the update entirely
        supplied = {
            key: value
            for key, value in {"name": name, "email": email, "age": age}.items()
            if value is not strawberry.UNSET
        }
        data = dto.UpdateUserInput(id=str(id), **supplied)
        user = await run_in_threadpool(_repository(info).update, data)
        return _maybe_user(user)

    @strawberry.mutation
    async def delete_user(self, info: Info, id: strawberry.ID) -> bool:
        return await run_in_threadpool(_repository(info).delete, str(id))


schema = strawberry.Schema(query=Query, mutation=Mutation)


async def get_context(request: Request) -> Dict[str, Any]:
    return {"connection": request.app.state.connection}


def create_graphql_router(graphiql: bool = True) -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if graphiql else None,
    )
