# adoptme/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from marshmallow import ValidationError
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials, firestore

# - 설정 / 예외
from adoptme.core.config import config_by_name
from adoptme.core.exceptions import AdoptmeError

# - API 블루프린트
from adoptme.api.adoptions.routes import adoptions_bp
from adoptme.api.mocks.routes import mocks_bp
from adoptme.api.pets.routes import pets_bp
from adoptme.api.sessions.routes import sessions_bp
from adoptme.api.users.routes import users_bp

# - 저장소 및 서비스 모듈
from adoptme.repositories.adoptions import AdoptionRepository
from adoptme.repositories.pets import PetRepository
from adoptme.repositories.users import UserRepository
from adoptme.services.storage_service import StorageService
from adoptme.api.adoptions.services import AdoptionService
from adoptme.api.mocks.services import MockService
from adoptme.api.pets.services import PetService
from adoptme.api.sessions.services import SessionService
from adoptme.api.users.services import UserService


def _init_firestore(app: Flask):
    """Firebase Admin SDK를 초기화하고 Firestore 클라이언트를 반환합니다."""
    if not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred, {
            'storageBucket': app.config['FIREBASE_STORAGE_BUCKET']
        })
    return firestore.client()


def create_app(config_name: str = None, db=None, storage_service: StorageService = None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development' | 'production' | 'testing'. 없으면 FLASK_ENV를 사용합니다.
    :param db: Firestore 클라이언트. 없으면 Firebase 자격 증명으로 새로 생성합니다.
    :param storage_service: 이미지 업로드 서비스. 없으면 설정된 버킷으로 생성합니다.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.config.get('JWT_SECRET_KEY'):
        raise ValueError("JWT_SECRET_KEY is not configured.")

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    jwt = JWTManager(app)

    @jwt.unauthorized_loader
    def handle_missing_session(reason):
        return jsonify({"status": "error", "error_code": "UNAUTHORIZED", "message": reason}), 401

    @jwt.invalid_token_loader
    def handle_invalid_session(reason):
        return jsonify({"status": "error", "error_code": "INVALID_TOKEN", "message": reason}), 401

    @jwt.expired_token_loader
    def handle_expired_session(jwt_header, jwt_payload):
        return jsonify({"status": "error", "error_code": "TOKEN_EXPIRED", "message": "Session has expired."}), 401

    if db is None:
        db = _init_firestore(app)

    if storage_service is None:
        storage_service = StorageService()
        storage_service.init_app(app)

    # =====================================================================================
    # 5. 저장소/서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    user_repository = UserRepository(db)
    pet_repository = PetRepository(db)
    adoption_repository = AdoptionRepository(db)

    app.services = {}
    app.services['storage'] = storage_service
    app.services['users'] = UserService(db, user_repository)
    app.services['sessions'] = SessionService(user_repository)
    app.services['pets'] = PetService(db, pet_repository, storage_service)
    app.services['mocks'] = MockService(user_repository, pet_repository)
    app.services['adoptions'] = AdoptionService(
        db,
        user_repository=user_repository,
        pet_repository=pet_repository,
        adoption_repository=adoption_repository
    )

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(pets_bp, url_prefix='/api/pets')
    app.register_blueprint(adoptions_bp, url_prefix='/api/adoptions')
    app.register_blueprint(sessions_bp, url_prefix='/api/sessions')
    app.register_blueprint(mocks_bp, url_prefix='/api/mocks')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"status": "error", "error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(AdoptmeError)
    def handle_domain_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 404/405 등 HTTP 예외는 Flask 기본 응답을 그대로 사용합니다.
        if isinstance(err, HTTPException):
            return err
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"status": "error", "error_code": "INTERNAL_SERVER_ERROR", "message": "Unexpected server error."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
