from pydantic import BaseModel, ConfigDict


class UpdateRequest(BaseModel):
    """Partial update for the current user. ``None`` means the field is not sent."""

    model_config = ConfigDict(frozen=True)

    username: str | None = None
    avatar: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.username is None and self.avatar is None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class UpdatedAccount(BaseModel):
    id: str
    username: str
    discriminator: str
    avatar: str | None = None

    @property
    def tag(self) -> str:
        return f"{self.username}#{self.discriminator}"

    def avatar_url(self, cdn_base_url: str) -> str:
        # Always .png, whatever format was uploaded
        return f"{cdn_base_url}/avatars/{self.id}/{self.avatar or ''}.png"
