# Import the extractor so every factor registers with the registry
from netprophet.features.extractor import FeatureVector, extract_features  # noqa: F401
