# Errors raised by the rules engine. None of them are retryable: the caller
# has to correct its request (roll first, pick another token, start a new game).
class RulesError(Exception):
    """Base exception for rules engine errors."""

    pass


class NoActiveRoll(RulesError):
    """Raised when a move is requested before the dice were rolled this turn."""

    pass


class TokenNotFound(RulesError):
    """Raised when a token id does not exist in the game state."""

    def __init__(self, token_id: int):
        super().__init__(f"Token {token_id} does not exist in this game")
        self.token_id = token_id


class IllegalMove(RulesError):
    """Raised when a token is not movable with the current dice."""

    def __init__(self, token_id: int, dice: int, legal: tuple[int, ...]):
        super().__init__(
            f"Token {token_id} cannot move with dice {dice}; legal tokens: {list(legal)}"
        )
        self.token_id = token_id
        self.dice = dice
        self.legal = legal


class GameAlreadyOver(RulesError):
    """Raised when an operation is requested after the game has been decided."""

    pass


class InvalidDice(RulesError):
    """Raised when a dice value falls outside 1..6."""

    pass


class SerializationError(RulesError):
    """Raised when a saved game cannot be decoded."""

    pass
