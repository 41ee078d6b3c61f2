class MatchError(Exception):
    """Base for every rejected match operation.

    Carries a stable ``code`` for clients and the HTTP status the REST
    layer answers with.
    """

    code = 'match_error'
    status_code = 400
    default_message = 'Request failed'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'error': self.message, 'code': self.code}


class BadRequest(MatchError):
    code = 'bad_request'
    default_message = 'Malformed request'


class InvalidMode(MatchError):
    code = 'invalid_mode'
    default_message = 'Unknown game mode'


class MatchNotFound(MatchError):
    code = 'not_found'
    status_code = 404
    default_message = 'Game not found'


class MatchFull(MatchError):
    code = 'full'
    status_code = 409
    default_message = 'Game already full'


class GameOver(MatchError):
    code = 'game_over'
    status_code = 409
    default_message = 'Game is over'


class PlayerNotInMatch(MatchError):
    code = 'player_not_in_match'
    status_code = 403
    default_message = 'Player not in this game'


class WrongTurn(MatchError):
    code = 'wrong_turn'
    status_code = 409
    default_message = 'Not your turn'


class InvalidCell(MatchError):
    code = 'invalid_cell'
    default_message = 'Cell index must be an integer between 0 and 8'


class CellOccupied(MatchError):
    code = 'cell_occupied'
    status_code = 409
    default_message = 'Cell occupied'
