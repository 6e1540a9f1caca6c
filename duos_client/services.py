from __future__ import annotations

from typing import Callable

import requests

from duos_client.apis import (
    CollectionApi,
    DacApi,
    DarApi,
    DatasetApi,
    EmailApi,
    InstitutionApi,
    LibraryCardApi,
    MatchApi,
    MetricsApi,
    OntologyApi,
    SupportApi,
    TerraDataRepoApi,
    TosApi,
    UserApi,
    VoteApi,
)
from duos_client.config import AppSettings
from duos_client.http import BusyIndicator, HttpClient
from duos_client.jobs import JobPoller
from duos_client.logging_utils import configure_logging
from duos_client.models import SessionSnapshot
from duos_client.reporting import ErrorReporter
from duos_client.session import (
    HeadlessNavigator,
    Navigator,
    SessionContext,
    SessionInvalidationInterceptor,
)


class DuosService:
    def __init__(
        self,
        settings: AppSettings,
        session_context: SessionContext,
        http_client: HttpClient,
        reporter: ErrorReporter,
        job_poller: JobPoller,
    ):
        self._settings = settings
        self._session_context = session_context
        self._http_client = http_client
        self._reporter = reporter

        self.collections = CollectionApi(settings, http_client)
        self.dacs = DacApi(settings, http_client)
        self.dars = DarApi(settings, http_client)
        self.datasets = DatasetApi(settings, http_client)
        self.email = EmailApi(settings, http_client)
        self.institutions = InstitutionApi(settings, http_client)
        self.library_cards = LibraryCardApi(settings, http_client)
        self.match = MatchApi(settings, http_client)
        self.metrics = MetricsApi(settings, http_client)
        self.ontology = OntologyApi(settings, http_client)
        self.support = SupportApi(settings, http_client)
        self.terra_data_repo = TerraDataRepoApi(settings, http_client, job_poller)
        self.tos = TosApi(settings, http_client)
        self.users = UserApi(settings, http_client)
        self.votes = VoteApi(settings, http_client)

    @property
    def busy(self) -> BusyIndicator:
        return self._http_client.busy

    def session_state(self) -> SessionSnapshot:
        return self._session_context.snapshot()

    def sign_in(self, credential: str) -> SessionSnapshot:
        """Accept a credential minted by the identity provider."""
        self._session_context.sign_in(credential)
        return self.session_state()

    def sign_out(self) -> None:
        self._session_context.sign_out()

    def close(self) -> None:
        self._http_client.close()
        self._reporter.close()


def build_service(
    settings: AppSettings | None = None,
    *,
    navigator: Navigator | None = None,
    on_busy_change: Callable[[int], None] | None = None,
    session: requests.Session | None = None,
    binary_session: requests.Session | None = None,
    configure: bool = False,
) -> DuosService:
    if configure:
        configure_logging()

    settings = settings or AppSettings.from_env()
    session_context = SessionContext()
    interceptor = SessionInvalidationInterceptor(
        session_context,
        navigator or HeadlessNavigator(),
        settings.login_path,
    )
    reporter = ErrorReporter(
        settings.error_report_url,
        timeout_seconds=settings.timeout_seconds,
        max_workers=settings.report_workers,
    )
    http_client = HttpClient(
        settings,
        session_context,
        interceptor,
        reporter,
        busy=BusyIndicator(on_busy_change),
        session=session,
        binary_session=binary_session,
    )
    job_poller = JobPoller(http_client, reporter, settings)
    return DuosService(settings, session_context, http_client, reporter, job_poller)
