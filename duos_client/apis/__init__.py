from .collection_api import CollectionApi
from .dac_api import DacApi
from .dar_api import DarApi
from .dataset_api import DatasetApi
from .email_api import EmailApi
from .institution_api import InstitutionApi
from .library_card_api import LibraryCardApi
from .match_api import MatchApi
from .metrics_api import MetricsApi
from .ontology_api import OntologyApi
from .support_api import SupportApi
from .terra_data_repo_api import TerraDataRepoApi
from .tos_api import TosApi
from .user_api import UserApi
from .vote_api import VoteApi

__all__ = [
    "CollectionApi",
    "DacApi",
    "DarApi",
    "DatasetApi",
    "EmailApi",
    "InstitutionApi",
    "LibraryCardApi",
    "MatchApi",
    "MetricsApi",
    "OntologyApi",
    "SupportApi",
    "TerraDataRepoApi",
    "TosApi",
    "UserApi",
    "VoteApi",
]
