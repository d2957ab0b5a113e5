import pandas as pd

from covid_db.loaders.base import DatasetBase
from covid_db.models import CovidTracking

# camelCase source column -> table column
COUNT_COLUMNS = {
    "positive": "positive",
    "probableCases": "probable_cases",
    "negative": "negative",
    "pending": "pending",
    "totalTestResults": "total_test_results",
    "hospitalizedCurrently": "hospitalized_currently",
    "hospitalizedCumulative": "hospitalized_cumulative",
    "inIcuCurrently": "in_icu_currently",
    "inIcuCumulative": "in_icu_cumulative",
    "onVentilatorCurrently": "on_ventilator_currently",
    "onVentilatorCumulative": "on_ventilator_cumulative",
    "recovered": "recovered",
    "death": "death",
    "hospitalized": "hospitalized",
    "totalTestsViral": "total_tests_viral",
    "positiveTestsViral": "positive_tests_viral",
    "negativeTestsViral": "negative_tests_viral",
    "positiveCasesViral": "positive_cases_viral",
    "deathConfirmed": "death_confirmed",
    "deathProbable": "death_probable",
    "positiveIncrease": "positive_increase",
    "negativeIncrease": "negative_increase",
    "totalTestResultsIncrease": "total_test_results_increase",
    "deathIncrease": "death_increase",
    "hospitalizedIncrease": "hospitalized_increase",
}


class CovidTrackingStates(DatasetBase):
    source_name = "The COVID Tracking Project"
    source = "https://covidtracking.com/api/v1/states/daily.csv"
    table = CovidTracking

    def normalize(self, data: pd.DataFrame) -> pd.DataFrame:
        df = self._add_date_columns(data, "date", fmt="%Y%m%d")
        df = df.rename(columns=COUNT_COLUMNS)
        df = self._to_int(df, list(COUNT_COLUMNS.values()))
        return df.assign(state_fips=self._state_fips(df["state"]))
