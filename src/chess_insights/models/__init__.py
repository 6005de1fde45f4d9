from chess_insights.models.match_record import MatchRecord, MatchSide, SideAccuracies

__all__ = ["MatchRecord", "MatchSide", "SideAccuracies"]
