import pytest

from matricare.modules.errors import DataFormatError, HistoryNotFoundError, StoreError
from matricare.modules.models import PregnancyInfo, RiskPrediction


def test_report_for_unknown_user_fails(make_service):
    with pytest.raises(HistoryNotFoundError):
        make_service().get_health_report("ghost")


def test_report_uses_display_name(make_service, history_store, document_store, personal_info, pregnancy_history):
    history_store.save_history("u-1", personal_info, pregnancy_history)
    document_store.tables["users"] = {"u-1": {"fullName": "Kavitha Naik"}}

    report = make_service().get_health_report("u-1")

    assert report.patient_name == "Kavitha Naik"
    assert report.date == "October 18, 2026"
    assert report.pregnancy_info == PregnancyInfo(
        number_of_pregnancies=2, number_of_live_births=1, number_of_abortions=1
    )


def test_missing_display_name_falls_back_to_patient(make_service, history_store, personal_info, pregnancy_history):
    history_store.save_history("u-1", personal_info, pregnancy_history)
    assert make_service().get_health_report("u-1").patient_name == "Patient"


def test_users_table_failure_falls_back_to_patient(make_service, history_store, document_store,
                                                   personal_info, pregnancy_history):
    history_store.save_history("u-1", personal_info, pregnancy_history)
    document_store.fail_on.add(('get', 'users'))
    assert make_service().get_health_report("u-1").patient_name == "Patient"


def test_history_store_failure_propagates(make_service, document_store):
    document_store.fail_on.add(('get', 'medical_history'))
    with pytest.raises(StoreError):
        make_service().get_health_report("u-1")


def test_malformed_history_propagates(make_service, document_store):
    document_store.tables["medical_history"] = {"u-1": {"pregnancyHistory": {"numberOfPregnancies": "two"}}}
    with pytest.raises(DataFormatError):
        make_service().get_health_report("u-1")


def test_read_path_never_runs_the_model(make_service, history_store, estimator, personal_info, pregnancy_history):
    # Stored label and a loaded model are both ignored when reading.
    history_store.save_history("u-1", personal_info, pregnancy_history, risk_label="High Risk")
    model = estimator(0.99)

    report = make_service(model=model).get_health_report("u-1")

    assert model.calls == []
    assert report.overall_status.title == "Excellent Health Status"


def test_generate_prediction_and_report(make_service, estimator, personal_info):
    service = make_service(model=estimator(0.75))
    pregnancy_info = PregnancyInfo(number_of_pregnancies=1)

    prediction = service.generate_ml_prediction(personal_info, pregnancy_info)
    report = service.generate_health_report_from_data(personal_info, "Asha", pregnancy_info, prediction)

    assert prediction == RiskPrediction(risk_level="High Risk")
    assert report.overall_status.title == "High Risk Pregnancy"
    assert report.patient_name == "Asha"


def test_generate_prediction_without_model(make_service, personal_info):
    service = make_service()
    prediction = service.generate_ml_prediction(personal_info, None)
    report = service.generate_health_report_from_data(
        personal_info.model_copy(update={"systolic_blood_pressure": 200}), "Asha", PregnancyInfo(), prediction
    )

    assert prediction is None
    assert report.overall_status.title == "Critical Health Status"


def test_save_complete_data_with_ml_stores_label(make_service, history_store, personal_info, pregnancy_history):
    service = make_service()

    message = service.save_complete_data_with_ml(
        "u-1", personal_info, pregnancy_history, RiskPrediction(risk_level="Moderate Risk")
    )

    assert message.endswith("u-1")
    assert history_store.fetch_history("u-1").ml_risk_level == "Moderate Risk"


def test_save_complete_data_without_prediction(make_service, history_store, personal_info, pregnancy_history):
    make_service().save_complete_data_with_ml("u-1", personal_info, pregnancy_history, None)
    assert history_store.fetch_history("u-1").ml_risk_level is None


def test_store_available(make_service):
    assert make_service().store_available is True
    assert make_service(store=None).store_available is False
