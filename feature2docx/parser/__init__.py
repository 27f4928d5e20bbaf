from feature2docx.parser.feature_parser import FeatureParser, ScenarioRecord, extract_scenarios, feature_title

__all__ = ["FeatureParser", "ScenarioRecord", "extract_scenarios", "feature_title"]
