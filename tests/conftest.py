"""
Shared fixtures: small IRS-style XML files written to tmp_path.

The name file mirrors a 1095-B submission (default namespace, unprefixed
tags). The error file mirrors an acknowledgement (ns2-prefixed message
elements, unprefixed UniqueRecordId).
"""

import pytest

import irs_error_parser.config as config_module


NAME_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Form109495BTransmittalUpstream xmlns="urn:us:gov:treasury:irs:ext:aca:air:7.0">
  <Form1094BUpstreamDetail>
    <SubmissionId>1</SubmissionId>
    <Form1095BUpstreamDetail>
      <RecordId>1</RecordId>
      <ResponsibleIndividualGrp>
        <ResponsibleIndividualName>
          <PersonFirstNm>Ann</PersonFirstNm>
          <PersonLastNm>Lee</PersonLastNm>
        </ResponsibleIndividualName>
        <TIN>000000001</TIN>
      </ResponsibleIndividualGrp>
    </Form1095BUpstreamDetail>
    <Form1095BUpstreamDetail>
      <RecordId>2</RecordId>
      <ResponsibleIndividualGrp>
        <ResponsibleIndividualName>
          <PersonFirstNm>Bo</PersonFirstNm>
          <PersonLastNm>Ng</PersonLastNm>
        </ResponsibleIndividualName>
      </ResponsibleIndividualGrp>
    </Form1095BUpstreamDetail>
  </Form1094BUpstreamDetail>
</Form109495BTransmittalUpstream>
"""

ERROR_XML = """<?xml version="1.0" encoding="UTF-8"?>
<ns2:ACABulkRequestTransmitterStatusDetailResponse
    xmlns="urn:us:gov:treasury:irs:common"
    xmlns:ns2="urn:us:gov:treasury:irs:msg:form1094-1095BCtransmitterupstreammessage">
  <ns2:ACABulkReqTrnsmtStsDtlResponseGrp>
    <ns2:ErrorDetailGrp>
      <UniqueRecordId>1095B-22-00012345|1|1</UniqueRecordId>
      <ns2:ErrorMessageCd>AIRSH100</ns2:ErrorMessageCd>
      <ns2:ErrorMessageTxt>Missing
          SSN</ns2:ErrorMessageTxt>
    </ns2:ErrorDetailGrp>
    <ns2:ErrorDetailGrp>
      <UniqueRecordId>1095B-22-00012345|1|3</UniqueRecordId>
      <ns2:ErrorMessageCd>AIRSH101</ns2:ErrorMessageCd>
      <ns2:ErrorMessageTxt>Bad DOB</ns2:ErrorMessageTxt>
    </ns2:ErrorDetailGrp>
  </ns2:ACABulkReqTrnsmtStsDtlResponseGrp>
</ns2:ACABulkRequestTransmitterStatusDetailResponse>
"""


@pytest.fixture(autouse=True)
def reset_config_singletons(monkeypatch):
    """Each test sees a freshly loaded configuration."""
    for var in (
        'BOUNDARY_POLICY', 'LOOKUP_STRATEGY', 'PARSER_CHUNK_SIZE', 'TRIM_TEXT', 'LOG_LEVEL',
        'REPORT_COLUMNS', 'REPORT_DELIMITER', 'REPORT_ENCODING',
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config_module, '_app_config', None)
    monkeypatch.setattr(config_module, '_report_config', None)
    yield


@pytest.fixture
def name_xml(tmp_path):
    """Submission file with names (1, Ann, Lee) and (2, Bo, Ng)."""
    path = tmp_path / 'submission.xml'
    path.write_text(NAME_XML, encoding='utf-8')
    return path


@pytest.fixture
def error_xml(tmp_path):
    """Acknowledgement file with errors for keys 1 and 3."""
    path = tmp_path / 'ack.xml'
    path.write_text(ERROR_XML, encoding='utf-8')
    return path


@pytest.fixture
def write_xml(tmp_path):
    """Write arbitrary XML text to a file and return its path."""
    def _write(text: str, name: str = 'input.xml'):
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return path
    return _write
