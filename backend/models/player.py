from dataclasses import dataclass, field


@dataclass(frozen=True)
class Player:
    id: int                                # stable gateway user id
    name: str | None = field(default=None, compare=False)
    bot: bool = field(default=False, compare=False)

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"
