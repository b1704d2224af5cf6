import pytest
from pydantic import ValidationError

from partidito.models import PlayerRecord, Position


def _skills(gk: float, df: float, md: float, fw: float) -> dict[Position, float]:
    return {
        Position.GOALKEEPER: gk,
        Position.DEFENDER: df,
        Position.MIDFIELDER: md,
        Position.FORWARD: fw,
    }


def test_player_record_is_frozen():
    record = PlayerRecord(player_id="p1", name="Lucía", position_skills=_skills(3, 6, 7, 8))

    assert record.player_id == "p1"
    assert record.stamina is None

    with pytest.raises((TypeError, ValidationError)):
        record.name = "Miguel"  # type: ignore[misc]


def test_skill_is_mean_of_ratings_rounded_to_one_decimal():
    assert PlayerRecord(player_id="a", name="A", position_skills=_skills(3, 6, 7, 8)).skill == 6.0
    assert PlayerRecord(player_id="b", name="B", position_skills=_skills(5, 6.5, 7, 8)).skill == 6.6


def test_positions_keep_every_top_rating():
    record = PlayerRecord(player_id="p1", name="Two Way", position_skills=_skills(2, 8, 5, 8))
    assert record.positions == [Position.DEFENDER, Position.FORWARD]

    keeper = PlayerRecord(player_id="p2", name="Keeper", position_skills=_skills(9, 4, 4, 3))
    assert keeper.positions == [Position.GOALKEEPER]


def test_position_skills_accept_codes_in_any_order():
    record = PlayerRecord(
        player_id="p1",
        name="Codes",
        position_skills={"FWD": 8, "GK": 1, "MID": 6, "DEF": 5},
    )
    assert list(record.position_skills) == list(Position)
    assert record.position_skills[Position.FORWARD] == 8.0


def test_missing_position_rating_rejected():
    with pytest.raises(ValidationError):
        PlayerRecord(
            player_id="p1",
            name="Partial",
            position_skills={Position.GOALKEEPER: 5, Position.DEFENDER: 5},
        )


@pytest.mark.parametrize("rating", [-0.5, 10.5])
def test_out_of_range_rating_rejected(rating):
    with pytest.raises(ValidationError):
        PlayerRecord(player_id="p1", name="Bad", position_skills=_skills(rating, 5, 5, 5))


def test_stamina_bounds():
    with pytest.raises(ValidationError):
        PlayerRecord(player_id="p1", name="Tired", position_skills=_skills(5, 5, 5, 5), stamina=11)

    record = PlayerRecord(player_id="p1", name="Fit", position_skills=_skills(5, 5, 5, 5), stamina=9.5)
    assert record.stamina == 9.5


def test_dump_includes_derived_fields_and_reloads():
    record = PlayerRecord(player_id="p1", name="Round Trip", position_skills=_skills(1, 5, 7, 3), stamina=6)
    dumped = record.model_dump()
    assert dumped["skill"] == 4.0
    assert dumped["positions"] == [Position.MIDFIELDER]

    assert PlayerRecord.model_validate(dumped) == record
