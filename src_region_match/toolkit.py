from .region_matching import RegionMatchCalculator
from .mosaic_stitching import MosaicStitchCalculator


class RegionMatchToolkit:
    def __init__(self, config):
        self.config = config
        self.match_calculator = None
        self.mosaic_calculator = None
        self.summaries = {}

    def create_matches(self):
        # initialization
        self.match_calculator = RegionMatchCalculator(self.config)
        # progress
        self.summaries['matching'] = self.match_calculator.create_matches()

    def create_mosaics(self):
        # initialization
        self.mosaic_calculator = MosaicStitchCalculator(self.config)
        # progress
        self.summaries['stitching'] = self.mosaic_calculator.create_mosaics()
