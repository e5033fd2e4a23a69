class InternalURIs:
    API = "/api"
    V1 = API + "/v1"
    EXTRACT = V1 + "/extract"
    VISUALIZE = V1 + "/visualize"
    DOCUMENTS = V1 + "/documents"
    DOCUMENT = DOCUMENTS + "/{document_id}"
    DOCUMENT_VISUALIZATION = DOCUMENT + "/visualization"
    DOCUMENT_PLAYBACK = DOCUMENT + "/playback"
