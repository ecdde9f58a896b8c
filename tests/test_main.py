"""Tests for the command line defaults."""

from gomoku.ai.config import AI_LEVELS, DEFAULT_LEVEL
from gomoku.app.controller_pvc import PvCConfig
from main import build_parser


class TestDefaults:
    """The default game plays the full-strength engine."""

    def test_default_level_is_uncapped(self) -> None:
        """The default level has no depth, time or candidate limit."""
        level = AI_LEVELS[DEFAULT_LEVEL]
        assert level.max_depth is None
        assert level.time_limit is None
        assert level.max_candidates is None

    def test_cli_and_config_use_default_level(self) -> None:
        """`pvc` without --lvl and a bare PvCConfig pick the same level."""
        args = build_parser().parse_args(["pvc"])
        assert args.lvl == DEFAULT_LEVEL
        assert PvCConfig().lvl == DEFAULT_LEVEL

    def test_lower_levels_still_selectable(self) -> None:
        """--lvl accepts every configured level."""
        for lvl in AI_LEVELS:
            assert build_parser().parse_args(["pvc", "--lvl", str(lvl)]).lvl == lvl
